"""QR Code (model 2, versions 1-40) encoder."""

from .errors import (
    DataTooLarge,
    EmptyInput,
    InvalidErrorCorrectionLevel,
    InvalidMask,
    InvalidVersion,
    QrCodeError,
    UnsupportedCharacters,
)
from .modes import Mode
from .symbol import Symbol, encode
from .tables import ErrorCorrection

__version__ = "1.0.0"

__all__ = [
    "DataTooLarge",
    "EmptyInput",
    "ErrorCorrection",
    "InvalidErrorCorrectionLevel",
    "InvalidMask",
    "InvalidVersion",
    "Mode",
    "QrCodeError",
    "Symbol",
    "UnsupportedCharacters",
    "encode",
]
