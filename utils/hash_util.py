import hashlib


def generate_hash(payload: bytes) -> str:
    """
    Fingerprint of a downloaded image (MD5 hex of the raw bytes)
    """
    return hashlib.md5(payload).hexdigest()
