import json
from pathlib import Path
from typing import Tuple, Union

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..errors import InvalidArgument


def load_keypair(path: Union[str, Path]) -> Keypair:
    """
    Load a keypair file in the format of the solana cli (json list of 64 bytes)
    """
    path = Path(path)
    secret = json.loads(path.read_text())
    if not isinstance(secret, list) or len(secret) != 64:
        raise InvalidArgument("keypair", f"{path} does not hold a 64 byte keypair")
    return Keypair.from_bytes(bytes(secret))


def get_signing_info(
    name: str, keys_dir: Union[str, Path] = None
) -> Tuple[Keypair, Pubkey]:
    if keys_dir is None:
        from . import keys_dir as default_keys_dir

        keys_dir = default_keys_dir
    keypair = load_keypair(Path(keys_dir) / f"{name}.json")
    return keypair, keypair.pubkey()
