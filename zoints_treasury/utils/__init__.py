import os
from pathlib import Path

rpc_url = os.environ.get("SOLANA_RPC_URL", "http://localhost:8899")
commitment = os.environ.get("SOLANA_COMMITMENT", "confirmed")
# address of the deployed treasury program, required by the scripts
program_id = os.environ.get("TREASURY_PROGRAM_ID")
keys_dir = Path(os.environ.get("TREASURY_KEYS_DIR", "keys"))

from .keys import get_signing_info, load_keypair
