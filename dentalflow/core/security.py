"""
Utilidades de seguridad: hashing de contraseñas y cifrado del snapshot (Fernet).
"""

from cryptography.fernet import Fernet, InvalidToken
from passlib.context import CryptContext

from dentalflow.core.exceptions import PersistenceException

# ── Hashing de contraseñas ───────────────────────────
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Genera hash bcrypt de una contraseña."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica una contraseña contra su hash bcrypt."""
    return pwd_context.verify(plain_password, hashed_password)


# ── Cifrado del snapshot (Fernet) ────────────────────


def encrypt_blob(value: str, key: str) -> str:
    """Cifra el snapshot serializado con la clave Fernet dada."""
    return Fernet(key.encode()).encrypt(value.encode()).decode()


def decrypt_blob(encrypted_value: str, key: str) -> str:
    """Descifra un snapshot. Un token inválido es un error de persistencia."""
    try:
        return Fernet(key.encode()).decrypt(encrypted_value.encode()).decode()
    except InvalidToken:
        raise PersistenceException("El snapshot almacenado no se puede descifrar")
