from cryptography.fernet import Fernet

from config import settings


_fernet = Fernet(settings.encryption_key)


def encrypt_access_token(access_token: str) -> str:
    return _fernet.encrypt(access_token.encode("utf-8")).decode("utf-8")


def decrypt_access_token(encrypted_value: str) -> str:
    return _fernet.decrypt(encrypted_value.encode("utf-8")).decode("utf-8")
