import secrets
import string

# Same URL-safe alphabet nanoid uses
ID_ALPHABET = string.ascii_letters + string.digits + "_-"


def generate_photo_id(length: int = 10) -> str:
    return ''.join(secrets.choice(ID_ALPHABET) for _ in range(length))
