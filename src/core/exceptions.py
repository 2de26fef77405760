"""
Exceptions raised across layers.

The board core itself reports a rejected move by returning False; exceptions are reserved for
input that cannot be interpreted at all, and for the service / persistence layers.
"""


class ChessBaseError(Exception):
    """Base class for all errors raised by this package"""


class InvalidFENError(ChessBaseError):
    """Board layout of a FEN string cannot be interpreted (unknown piece letter, piece off the board)"""


class InvalidSquareError(ChessBaseError):
    """Text is not a square name between 'a1' and 'h8'"""


class IllegalMoveError(ChessBaseError):
    """The board refused to execute the requested move"""


class PositionStateError(ChessBaseError):
    """A stored position cannot be restored, or an operation does not apply to it"""


class RepositoryError(ChessBaseError):
    """Record not found / could not be stored"""


class InvalidRequestError(ChessBaseError):
    """Request data fails validation (raised from within the request models)"""
