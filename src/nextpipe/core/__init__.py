"""Core data types for nextpipe.

The tagged result union lives here so the combinators, the pipe helpers
and user code can all share a single definition.
"""

from .result_primitives import Failure, Result, Success, is_result

__all__ = ["Failure", "Result", "Success", "is_result"]
