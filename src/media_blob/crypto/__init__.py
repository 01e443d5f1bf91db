"""Deszyfrowanie mediów relacji."""

from .cipher import MEDIA_CIPHER, CipherScheme, Decryptor, decrypt_media, encrypt_media

__all__ = [
	"CipherScheme",
	"Decryptor",
	"MEDIA_CIPHER",
	"decrypt_media",
	"encrypt_media",
]
