"""
Seriatim iterator: the lazy matcher that turns tokens into ordered results.

What this module provides
- Iter: pull-based state machine over one token sequence. Each next() yields
  exactly one element, in the order its triggering text appears:
  • the caller's value built by a spec (flag, param or cardinal),
  • a Passthrough wrapping a raw token after '--' (when no cardinal exists),
  • an OptionError instance describing one malformed occurrence.
- State: the four cursor states (FRESH, IN_CLUSTER, PAST_SEPARATOR, EXHAUSTED).
- Passthrough: the raw-text result for tokens after the separator.

Recovery policy
- Errors are yielded, never raised, and parsing continues with the next
  character of a cluster or the next token. Callers decide whether to stop
  folding on the first error (Config.parse does).
- Plain tokens before '--' are unrecognized unless the config has a cardinal.

Token grammar
    -c            short alias c (flag or param)
    -cXYZ         cluster: flags c, X, Y, Z; or param c with inline value XYZ
    -c / --name   optional param with nothing attached: built with None
    --name        long alias (param value from the next token)
    --name=value  long alias with inline value
    --            separator; everything after is non-option text
"""
import difflib
from collections import namedtuple
from enum import Enum

from .arguments import Flag, Param, OptionalParam
from .faults import *
from .utils import *


class State(Enum):
    """
    cursor state of an Iter.

    - FRESH: no token is being unpacked; the next pull reads a new token.
    - IN_CLUSTER: mid-way through a short cluster such as '-va' (offset > 0).
    - PAST_SEPARATOR: '--' was consumed; remaining tokens are plain text.
    - EXHAUSTED: the token sequence is drained; terminal.
    """
    FRESH = "fresh"
    IN_CLUSTER = "in-cluster"
    PAST_SEPARATOR = "past-separator"
    EXHAUSTED = "exhausted"


Passthrough = namedtuple("Passthrough", ("text",))
Passthrough.__doc__ = "raw token found after the '--' separator (no option interpretation)"


class Iter:
    """
    Lazy iterator over the results of one token sequence.

    Built by Config.iter(tokens); the config is only read, so several
    iterators may run over the same config, and running twice over the same
    tokens yields equal sequences. Stopping early is always safe.

    Cursor
    - _tokens: the underlying token iterator (pulled on demand).
    - _token/_offset: the cluster being unpacked and the position of its next character.
    - _index: 0-based position of the last pulled token (used in error options).
    - _state: see State.
    """

    def __init__(self, config, tokens, /):
        self._config = config
        self._tokens = iter(tokens)
        self._token = Unset
        self._offset = 0
        self._index = -1
        self._state = State.FRESH

    @property
    def state(self):
        return self._state

    @property
    def index(self):
        return self._index

    def __iter__(self):
        return self

    def __next__(self):
        while True:
            match self._state:
                case State.EXHAUSTED:
                    raise StopIteration
                case State.IN_CLUSTER:
                    return self._short()
                case State.PAST_SEPARATOR:
                    if (token := self._pull()) is Unset:
                        raise StopIteration
                    return self._plain(token, separated=True)

            if (token := self._pull()) is Unset:
                raise StopIteration

            if token == "--":
                self._state = State.PAST_SEPARATOR
                continue

            if token.startswith("--"):
                return self._long(token)

            if token.startswith("-") and len(token) > 1:
                # start unpacking right away; a cluster always yields at least one element
                self._token = token
                self._offset = 1
                self._state = State.IN_CLUSTER
                return self._short()

            return self._plain(token, separated=False)

    def _pull(self):
        """
        read the next raw token, or mark the iterator exhausted and return Unset.
        """
        try:
            token = next(self._tokens)
        except StopIteration:
            self._state = State.EXHAUSTED
            return Unset

        if not isinstance(token, str):
            raise TypeError("iter() tokens must be strings, got %r" % type(token).__name__)

        self._index += 1
        return token

    def _release(self):
        """
        leave the current cluster; the next pull reads a fresh token.
        """
        self._token = Unset
        self._offset = 0
        self._state = State.FRESH

    def _short(self):
        """
        consume one character of the current cluster and produce its result.
        """
        token, offset, index = self._token, self._offset, self._index
        char = token[offset]
        rest = token[offset + 1:]
        input = "-" + char

        argument = self._config.lookup_short(char)

        if isinstance(argument, OptionalParam):
            # only an attached value counts; the next token is left alone
            self._release()
            return self._build(argument, input, index, rest or None, spelling=input + rest)

        if isinstance(argument, Param):
            # a param always ends the cluster: it owns the rest of the token or the next one
            self._release()
            if rest:
                return self._build(argument, input, index, rest, spelling=input + rest)
            if (value := self._pull()) is Unset:
                return self._missing(argument, input, index)
            return self._build(argument, input, index, value)

        if rest:
            self._offset += 1
        else:
            self._release()

        if argument is None:
            return self._unrecognized(input, index)

        return self._build(argument, input, index)

    def _long(self, token):
        """
        resolve a '--name' or '--name=value' token.
        """
        index = self._index
        name, equals, inline = token[2:].partition("=")
        input = "--" + name

        argument = self._config.lookup_long(name)

        if argument is None:
            return self._unrecognized(input, index)

        if isinstance(argument, Flag):
            if equals:
                return UnexpectedArgumentError(
                    "option %r: unexpected parameter %r" % (input, inline),
                    title="flag cannot take a value",
                    code=FaultCode.UNEXPECTED_ARGUMENT,
                    hint="remove everything from '=' (for example: %s)" % input,
                    input=input,
                    index=index,
                    value=inline,
                    argument=argument,
                    docs=getdoc(FaultCode.UNEXPECTED_ARGUMENT),
                )
            return self._build(argument, input, index)

        if equals:
            return self._build(argument, input, index, inline, spelling=token)
        if isinstance(argument, OptionalParam):
            return self._build(argument, input, index, None)
        if (value := self._pull()) is Unset:
            return self._missing(argument, input, index)
        return self._build(argument, input, index, value)

    def _plain(self, token, *, separated):
        """
        resolve a token that is not an option (or any token after '--').
        """
        if (argument := self._config.cardinal) is not None:
            return self._build(argument, token, self._index, token)

        if separated:
            return Passthrough(token)

        return UnrecognizedOptionError(
            "unexpected positional argument %r" % token,
            title="unexpected positional",
            code=FaultCode.UNEXPECTED_CARDINAL,
            hint="remove this extra value, or put it after '--' to pass it through",
            input=token,
            index=self._index,
            docs=getdoc(FaultCode.UNEXPECTED_CARDINAL),
        )

    def _build(self, argument, input, index, *values, spelling=Unset):
        """
        call the spec's build function; a raising build becomes InvalidParameterError.

        spelling is the option as typed when the value was attached ('-fhello',
        '--freq=hello'); messages show it instead of the bare alias.
        """
        try:
            return argument(*values)
        except Exception as exception:
            spelling = coalesce(spelling, input)
            if values:
                message = "option %r: invalid value %r (%s)" % (spelling, values[0], exception)
                hint = "use a valid %s for %r" % (argument.metavar, input)
            else:
                message = "option %r: %s" % (spelling, exception)
                hint = "check how %r is used" % input
            error = InvalidParameterError(
                message,
                title="conversion error",
                code=FaultCode.INVALID_PARAMETER,
                hint=hint,
                input=input,
                index=index,
                argument=argument,
                exception=exception,
                docs=getdoc(FaultCode.INVALID_PARAMETER),
            )
            error.__cause__ = exception
            return error

    def _missing(self, argument, input, index):
        return MissingArgumentError(
            "option %r: missing parameter %s" % (input, argument.metavar),
            title="missing parameter",
            code=FaultCode.MISSING_ARGUMENT,
            hint="pass a value after a space (for example: %s <%s>)" % (input, argument.metavar),
            input=input,
            index=index,
            metavar=argument.metavar,
            argument=argument,
            docs=getdoc(FaultCode.MISSING_ARGUMENT),
        )

    def _unrecognized(self, input, index):
        suggestions = difflib.get_close_matches(input, self._config.aliases, 5)
        try:
            hint = "did you mean %r? run '%s --help' to see all options" % (suggestions[0], self._config.prog)
        except IndexError:
            hint = "run '%s --help' to see all available options" % self._config.prog
        return UnrecognizedOptionError(
            "option %r: unrecognized" % input,
            title="unrecognized option",
            code=FaultCode.UNRECOGNIZED_OPTION,
            hint=hint,
            input=input,
            index=index,
            suggestions=suggestions,
            docs=getdoc(FaultCode.UNRECOGNIZED_OPTION),
        )


__all__ = (
    "Iter",
    "State",
    "Passthrough",
)
