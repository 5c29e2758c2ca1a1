"""
healthledger_core.utils
-----------------------
Encoding and clock helpers shared by the models and storage providers.

Identities and wrapped keys travel as strict base64 text; record bodies and
audit payloads are persisted as sorted, compact JSON so the same record
always serializes to the same string. Record addresses are random hex ids.
"""

from __future__ import annotations
import base64, json, time, uuid, hashlib
from typing import Any, Dict


# --- base64 codec for identities and wrapped keys ---

def b64e(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")

def b64d(text: str) -> bytes:
    # strict: stray characters are an encoding error, not silently dropped
    return base64.b64decode(text.encode("ascii"), validate=True)


# --- clocks ---

def unix_now() -> int:
    """Default ``created_at`` source: signed unix seconds."""
    return int(time.time())

def now_ts() -> str:
    # audit rows only; records use unix_now
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


# --- ids, hashing, persisted JSON ---

def new_id() -> str:
    return uuid.uuid4().hex

def sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()

def canonical_json(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
