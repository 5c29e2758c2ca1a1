# healthledger_core/constants.py

MAX_CID_LEN = 64
MAX_TITLE_LEN = 64
MAX_ENC_KEY_LEN = 512
MAX_RECIPIENTS = 10

IDENTITY_LEN = 32

CONFIG_BUMP = 255
