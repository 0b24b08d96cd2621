# coding: utf-8
"""Exceptions for EPANET INP file loading."""

from typing import List

EN_ERROR_CODES = {
    # Apply only to an input file
    201: "syntax error (%s)",
    202: "illegal numeric value, %s",
    213: "invalid option value %s",
    215: "duplicate ID label, %s",
    # File errors
    302: "cannot open input file %s",
    # Loader errors
    311: "input file %s is empty or corrupt",
    312: "required section %s is missing or empty",
    313: "unsupported water quality analysis %s, only chemical analysis is supported",
    314: "single period snapshot analysis is not supported",
    315: "number of report steps must be positive, got %s",
}
"""A dictionary of the error codes and their meanings for INP file loading.

Codes 201-302 follow the EPANET toolkit numbering; codes 311-315 are specific
to the water quality network loader.

:meta hide-value:
"""


class EpanetException(Exception):

    def __init__(self, code: int, *args: List[object], line_num=None, line=None) -> None:
        """An Exception class for INP file loading exceptions.

        Parameters
        ----------
        code : int
            The error code
        args : additional non-keyword arguments, optional
            If there is a string-format within the error code's text, these will be used to
            replace the format, otherwise they will be output at the end of the Exception message.
        line_num : int, optional
            The line number, if reading an INP file, by default None
        line : str, optional
            The contents of the line, by default None
        """
        msg = EN_ERROR_CODES.get(code, "unknown error")
        if args is not None:
            args = [*args]
        if r"%" in msg and len(args) > 0:
            msg = msg % repr(args.pop(0))
        if len(args) > 0:
            msg = msg + " " + repr(args)
        if line_num:
            msg = msg + ", at line {}".format(line_num)
        if line:
            msg = msg + ":\n   " + str(line)
        msg = "(Error {}) ".format(code) + msg
        self.code = code
        super().__init__(msg)


class ENSyntaxError(EpanetException, SyntaxError):
    def __init__(self, code, *args, line_num=None, line=None) -> None:
        """An exception class that also subclasses SyntaxError

        Parameters
        ----------
        code : int
            The error code
        args : additional non-keyword arguments, optional
            Values substituted into, or appended to, the error code's text.
        line_num : int, optional
            The line number, if reading an INP file, by default None
        line : str, optional
            The contents of the line, by default None
        """
        super().__init__(code, *args, line_num=line_num, line=line)


class ENKeyError(EpanetException, KeyError):
    def __init__(self, code, name, *args, line_num=None, line=None) -> None:
        """An exception class that also subclasses KeyError.

        Parameters
        ----------
        code : int
            The error code
        name : str
            The key/name/id that is missing
        args : additional non-keyword arguments, optional
            Values substituted into, or appended to, the error code's text.
        line_num : int, optional
            The line number, if reading an INP file, by default None
        line : str, optional
            The contents of the line, by default None
        """

        super().__init__(code, name, *args, line_num=line_num, line=line)


class ENValueError(EpanetException, ValueError):
    def __init__(self, code, value, *args, line_num=None, line=None) -> None:
        """An exception class that also subclasses ValueError

        Parameters
        ----------
        code : int
            The error code
        value : Any
            The value that is invalid
        args : additional non-keyword arguments, optional
            Values substituted into, or appended to, the error code's text.
        line_num : int, optional
            The line number, if reading an INP file, by default None
        line : str, optional
            The contents of the line, by default None
        """
        super().__init__(code, value, *args, line_num=line_num, line=line)
