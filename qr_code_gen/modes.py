import enum
import re


class Mode(enum.Enum):
    NUMERIC = 0b0001
    ALPHANUMERIC = 0b0010
    BYTE = 0b0100
    KANJI = 0b1000  # declared for completeness, never selected or encoded

    @property
    def indicator(self):
        return f'{self.value:04b}'


ALPHANUMERIC_CHARS = b'0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:'

_NUMERIC_PATTERN = re.compile(br'[0-9]*\Z')
_ALPHANUMERIC_PATTERN = re.compile(br'[' + re.escape(ALPHANUMERIC_CHARS) + br']*\Z')


def is_numeric(data):
    return _NUMERIC_PATTERN.match(data) is not None


def is_alphanumeric(data):
    return _ALPHANUMERIC_PATTERN.match(data) is not None


def select_mode(data):
    """Pick the most compact single mode able to hold all of ``data``.

    Mixed-mode segmentation is not attempted: the whole input is encoded as one
    segment, so e.g. a long digit run inside a URL still costs 8 bits per digit.
    """
    if is_numeric(data):
        return Mode.NUMERIC
    if is_alphanumeric(data):
        return Mode.ALPHANUMERIC
    return Mode.BYTE
