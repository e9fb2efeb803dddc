class PersonalColorError(Exception):
    """Base class for errors raised by personal_color"""
    pass


class InvalidInputError(PersonalColorError, ValueError):
    """Malformed hex string, empty image or unusable face box"""
    pass


class ComputationError(PersonalColorError, ArithmeticError):
    """Non-finite intermediate value; indicates a bug, not bad input"""
    pass
