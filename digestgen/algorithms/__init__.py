"""Built-in algorithm code generators.

Importing this package registers every built-in algorithm under its external
name.
"""

from digestgen.interfaces.codegen import ICodeGen
from digestgen.registry import code_generator, register, registered

from .blake3_gen import Blake3Gen
from .checksum_gen import ChecksumGen
from .cryptography_gen import CryptographyHashGen, CryptographyHmacGen

BUILTINS: dict[str, ICodeGen] = {
    "md5": CryptographyHmacGen("MD5", "MD5"),
    "sha1": CryptographyHmacGen("SHA-1", "SHA1"),
    "sha224": CryptographyHmacGen("SHA-224", "SHA224"),
    "sha256": CryptographyHmacGen("SHA-256", "SHA256"),
    "sha384": CryptographyHmacGen("SHA-384", "SHA384"),
    "sha512": CryptographyHmacGen("SHA-512", "SHA512"),
    "sha3-224": CryptographyHmacGen("SHA3-224", "SHA3_224"),
    "sha3-256": CryptographyHmacGen("SHA3-256", "SHA3_256"),
    "sha3-384": CryptographyHmacGen("SHA3-384", "SHA3_384"),
    "sha3-512": CryptographyHmacGen("SHA3-512", "SHA3_512"),
    "blake2b": CryptographyHashGen("BLAKE2b-512", "BLAKE2b", 64),
    "blake2s": CryptographyHashGen("BLAKE2s-256", "BLAKE2s", 32),
    "blake3": Blake3Gen(),
    "crc32": ChecksumGen("CRC32", "crc32", 0),
    "adler32": ChecksumGen("Adler-32", "adler32", 1),
}


def register_builtins() -> None:
    """Register the built-in algorithms that are not registered yet."""
    taken = set(registered())
    for algorithm, generator in BUILTINS.items():
        if algorithm not in taken:
            register(algorithm, generator)


register_builtins()

__all__ = [
    "BUILTINS",
    "Blake3Gen",
    "ChecksumGen",
    "CryptographyHashGen",
    "CryptographyHmacGen",
    "code_generator",
    "register_builtins",
]
