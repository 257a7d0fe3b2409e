"""General utilities, such as exception classes."""


# Recoverable errors: bad input that the caller is expected to handle.

class DecimalError(Exception):
    """Base fixdec error."""

class ParseError(DecimalError):
    """Unable to parse input."""

class ParseEmptyError(ParseError):
    """Unable to parse empty input."""

class ParseBaseError(ParseError):
    """Unable to parse non base 10 input."""

class DifferentScaleError(DecimalError):
    """Operands were given at different scales."""

class ExceedsRangeError(DecimalError):
    """Exceeds allowable range for value."""

class ExceedsPrecisionRangeError(DecimalError):
    """Exceeds allowable range for precision."""

class SignedDecimalsNotSupportedError(DecimalError):
    """Signed decimals not supported for this function."""


# Faults: the operands were inconsistent with their declared scale or
# domain. These are deliberately not DecimalErrors.

class DecimalFault(Exception):
    """Base fixdec fault. The computation cannot continue."""

class OverflowFault(DecimalFault, OverflowError):
    """Checked arithmetic left the range of its integer width."""

class NarrowingFault(OverflowFault):
    """A value does not fit in the narrower integer width it was converted to."""

class DivisionByZeroFault(DecimalFault, ZeroDivisionError):
    """Integer division by a zero denominator."""

class DomainFault(DecimalFault, ValueError):
    """An operand lies outside the domain of a function, such as log(0)."""

class UnsupportedExponentFault(DecimalFault, NotImplementedError):
    """Power with an exponent that has no closed form here."""


# some common data structures

class ImmutableDict(dict):
    def __delitem__(self, key):
        raise ValueError('ImmutableDict cannot be modified: attempt to delete {}'
                         .format(repr(key)))

    def __setitem__(self, key, value):
        raise ValueError('ImmutableDict cannot be modified: attempt to assign [{}] = {}'
                         .format(repr(key), repr(value)))

    def clear(self):
        raise ValueError('ImmutableDict cannot be modified: attempt to clear')

    def pop(self, key, *args):
        raise ValueError('ImmutableDict cannot be modified: attempt to pop {}'
                         .format(repr(key)))

    def popitem(self):
        raise ValueError('ImmutableDict cannot be modified: attempt to popitem')

    def setdefault(self, key, default=None):
        raise ValueError('ImmutableDict cannot be modified: attempt to setdefault {}, default={}'
                         .format(repr(key), repr(default)))

    def update(self, *args, **kwargs):
        raise ValueError('ImmutableDict cannot be modified: attempt to update')
