# encoding/hashing.py
import hashlib


def generate_hash(message: str) -> str:
    """MD5 of the UTF-8 message as 32 lowercase hex characters."""
    return hashlib.md5(message.encode("utf-8")).hexdigest()
