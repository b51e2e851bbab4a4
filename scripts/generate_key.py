"""
Genera una clave Fernet para cifrar el snapshot guardado.

    python scripts/generate_key.py

Copiar el valor a SNAPSHOT_ENCRYPTION_KEY en el .env. Si se pierde la clave
el snapshot cifrado ya no se puede leer.
"""

from cryptography.fernet import Fernet


def main():
    key = Fernet.generate_key().decode()
    print("SNAPSHOT_ENCRYPTION_KEY=" + key)


if __name__ == "__main__":
    main()
