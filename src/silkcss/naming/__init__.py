from silkcss.naming.hash import HASH_BITS, from_base36, hash32, to_base36
from silkcss.naming.namer import Namer, atom_key, class_name, decode_hash

__all__ = [
    "HASH_BITS",
    "Namer",
    "atom_key",
    "class_name",
    "decode_hash",
    "from_base36",
    "hash32",
    "to_base36",
]
