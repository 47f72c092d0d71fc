class QrCodeError(ValueError):
    """Base class for everything encode() can reject."""


class EmptyInput(QrCodeError):
    pass


class InvalidErrorCorrectionLevel(QrCodeError):
    pass


class InvalidVersion(QrCodeError):
    pass


class InvalidMask(QrCodeError):
    pass


class DataTooLarge(QrCodeError):
    pass


# only raised when a mode is forced onto data it cannot represent, or for Kanji
class UnsupportedCharacters(QrCodeError):
    pass
