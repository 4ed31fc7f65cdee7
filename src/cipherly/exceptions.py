"""
Exceptions for Cipherly
Everything raised on purpose derives from CipherlyError so callers have one catch-all
"""


class CipherlyError(Exception):
    # general container for errors
    pass


class ConfigurationError(CipherlyError, ValueError):
    # raised when a Cipher is built with unusable settings
    pass


class UnsupportedInputTypeError(CipherlyError, TypeError):
    # raised when encrypt() gets a value it has no serialization for
    pass


class MalformedInputError(CipherlyError, ValueError):
    # raised when a blob is not valid base64 or is too short to hold a nonce
    pass


class AuthenticationFailureError(CipherlyError, ValueError):
    # raised when the GCM tag does not verify (wrong passphrase or tampered blob)
    pass
