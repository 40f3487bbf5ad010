"""
Exceptions raised while validating edge list inputs.
"""

from typing import Any


class EntropynetError(ValueError):
    """Base class for all input validation errors."""
    pass


class LengthMismatchError(EntropynetError):
    """
    Raised when parallel edge sequences have different lengths.
    
    Attributes:
        name: Name of the offending sequence (e.g. 'b' or 'w')
        expected: Length of the reference sequence 'a'
        actual: Length of the offending sequence
    """
    
    def __init__(self, name: str, expected: int, actual: int):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Sequence '{name}' has length {actual}, expected {expected} "
            f"(all edge sequences must have the same length)"
        )


class InvalidWeightError(EntropynetError):
    """
    Raised when an edge weight is not a finite real number.
    
    Attributes:
        index: Position of the offending edge
        value: The weight found at that position
    """
    
    def __init__(self, index: int, value: Any):
        self.index = index
        self.value = value
        super().__init__(f"Weight at edge {index} is not a finite number: {value!r}")


class NodeCountMismatchError(EntropynetError):
    """
    Raised when the distinct label count differs from the expected total.
    
    Attributes:
        expected: Node count supplied by the caller
        actual: Number of distinct labels found in the edge list
    """
    
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Found {actual} distinct nodes, expected {expected}"
        )
