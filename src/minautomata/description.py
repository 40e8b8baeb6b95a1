# Copyright 2024 Matt Chaput. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY MATT CHAPUT ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL MATT CHAPUT OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA,
# OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of Matt Chaput.

"""
Immutable automaton descriptions.

A description is the value an engine is built from: a transition table, a
start state and a set of accept states. The set of states is never given
explicitly, it is derived from the table.

Deterministic tables map ``state -> {symbol: state}`` and must be total over
the alphabet. Nondeterministic tables map ``state -> {symbol: states}`` where
the destinations may be any iterable of states and missing entries simply mean
"no edge". Epsilon edges use the :data:`EPSILON` marker (``"λ"`` and ``"ε"``
are accepted as spellings of it).
"""

from cached_property import cached_property
from loguru import logger

# Messages from this package stay off until the application calls
# logger.enable("minautomata")
logger.disable("minautomata")


class Marker:
    """
    Represents a marker object.

    Markers are singletons used as special labels in a transition table, where
    an ordinary string could be confused with an input symbol.

    Example:
        >>> marker = Marker("EPSILON")
        >>> repr(marker)
        '<EPSILON>'
    """

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"<{self.name}>"


EPSILON = Marker("EPSILON")

# Spellings that are read as EPSILON when they appear as labels
EPSILON_ALIASES = ("λ", "ε")

# Default input alphabet
BINARY = ("0", "1")


class MalformedAutomatonError(Exception):
    """
    Exception raised when an automaton description is not well formed.

    This is raised for a deterministic table with a missing (state, symbol)
    entry, for a start or accept state that is not among the declared states,
    and for a transition target that was never declared.

    Attributes:
        message (str): Explanation of the error.
    """

    def __init__(self, message):
        self.message = message
        super().__init__(message)


def symbol_label(label):
    """
    Normalizes an input symbol: integers become their string form so that
    ``0`` and ``"0"`` name the same symbol, and epsilon spellings become
    :data:`EPSILON`.
    """

    if label is EPSILON or label in EPSILON_ALIASES:
        return EPSILON
    if isinstance(label, int):
        return str(label)
    return label


class Description:
    """
    Base class for automaton descriptions.

    Subclasses fill in ``_transitions`` and implement :meth:`all_states`.
    Descriptions compare and hash by value.
    """

    def __init__(self, start, accept_states, alphabet=BINARY):
        self.start = start
        self.accept_states = frozenset(accept_states)
        self.alphabet = tuple(symbol_label(label) for label in alphabet)

    def __len__(self):
        return len(self.states)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "{}(start={!r}, accept_states={!r}, states={!r})".format(
            type(self).__name__,
            self.start,
            sorted(self.accept_states, key=repr),
            list(self.states),
        )

    def _key(self):
        items = frozenset(
            (src, frozenset(trans.items())) for src, trans in self._transitions.items()
        )
        return items, self.start, self.accept_states, self.alphabet

    @property
    def transitions(self):
        """
        Returns a fresh copy of the transition table, so the description
        itself can't be changed through it.
        """
        return self.as_dict()["transitions"]

    @cached_property
    def states(self):
        """
        The declared states, in declaration order.
        """
        return tuple(self.all_states())

    def all_states(self):
        raise NotImplementedError

    def labels(self, state):
        """
        Returns the labels that have an entry for ``state``.
        """
        return tuple(self._transitions.get(state, ()))

    def is_final(self, state):
        return state in self.accept_states

    def as_dict(self):
        raise NotImplementedError


class DFADescription(Description):
    """
    Description of a deterministic automaton.

    Args:
        transitions (dict): Maps each state to a dict of ``symbol -> state``.
            The keys of this mapping are the declared states.
        start: The start state.
        accept_states (iterable): The accepting states.
        alphabet (tuple, optional): The input alphabet. Defaults to
            :data:`BINARY`.

    Raises:
        MalformedAutomatonError: If the start state or an accept state is not
            a declared state, or if a label is outside the alphabet.

    Example:
        >>> desc = DFADescription(
        ...     {"S": {0: "A", 1: "B"}, "A": {0: "A", 1: "A"}, "B": {0: "B", 1: "B"}},
        ...     start="S",
        ...     accept_states=["A"],
        ... )
        >>> desc.states
        ('S', 'A', 'B')
    """

    def __init__(self, transitions, start, accept_states, alphabet=BINARY):
        super().__init__(start, accept_states, alphabet)
        self._transitions = {}
        for src, trans in transitions.items():
            table = self._transitions[src] = {}
            for label, dest in trans.items():
                label = symbol_label(label)
                if label not in self.alphabet:
                    raise MalformedAutomatonError(
                        f"State {src!r} has a transition on {label!r}, "
                        f"which is not in the alphabet {self.alphabet!r}"
                    )
                table[label] = dest

        if start not in self._transitions:
            raise MalformedAutomatonError(
                f"Start state {start!r} is not a declared state"
            )
        undeclared = [s for s in self.accept_states if s not in self._transitions]
        if undeclared:
            raise MalformedAutomatonError(
                f"Accept states {sorted(undeclared, key=repr)!r} are not declared states"
            )

    def all_states(self):
        return iter(self._transitions)

    def target(self, state, label):
        """
        Returns the destination of the edge labeled ``label`` leaving
        ``state``.

        Raises:
            MalformedAutomatonError: If there is no such edge.
        """
        try:
            trans = self._transitions[state]
        except KeyError:
            raise MalformedAutomatonError(
                f"State {state!r} is not a declared state"
            ) from None
        label = symbol_label(label)
        try:
            return trans[label]
        except KeyError:
            raise MalformedAutomatonError(
                f"No transition from state {state!r} on symbol {label!r}"
            ) from None

    def check_total(self):
        """
        Checks that every declared state has a transition on every symbol of
        the alphabet and that every target is a declared state.

        Raises:
            MalformedAutomatonError: Naming the first offending entry.
        """
        transitions = self._transitions
        for src, trans in transitions.items():
            for label in self.alphabet:
                if label not in trans:
                    raise MalformedAutomatonError(
                        f"No transition from state {src!r} on symbol {label!r}"
                    )
                dest = trans[label]
                if dest not in transitions:
                    raise MalformedAutomatonError(
                        f"Transition {src!r} --{label}--> {dest!r} leads to "
                        f"an undeclared state"
                    )

    def as_dict(self):
        """
        Returns the description as plain, newly built Python containers.
        """
        return {
            "transitions": {
                src: dict(trans) for src, trans in self._transitions.items()
            },
            "start": self.start,
            "accept_states": set(self.accept_states),
        }


class NFADescription(Description):
    """
    Description of a nondeterministic automaton.

    Args:
        transitions (dict): Maps each state to a dict of ``symbol ->
            iterable of states``. Entries may be missing.
        start: The start state.
        accept_states (iterable): The accepting states.
        alphabet (tuple, optional): The consuming alphabet. Epsilon is always
            allowed in addition. Defaults to :data:`BINARY`.

    Unlike :class:`DFADescription` nothing is required to be total, and
    states that only appear as targets are still states.
    """

    def __init__(self, transitions, start, accept_states, alphabet=BINARY):
        super().__init__(start, accept_states, alphabet)
        self._transitions = {}
        for src, trans in transitions.items():
            table = self._transitions.setdefault(src, {})
            for label, dests in trans.items():
                label = symbol_label(label)
                if isinstance(dests, (str, bytes)):
                    dests = (dests,)
                # "ε" and EPSILON given for the same state are merged
                table[label] = table.get(label, frozenset()) | frozenset(dests)

    def all_states(self):
        stateset = dict.fromkeys(self._transitions)
        for trans in self._transitions.values():
            for dests in trans.values():
                stateset.update(dict.fromkeys(dests))
        stateset.setdefault(self.start)
        stateset.update(dict.fromkeys(self.accept_states))
        return iter(stateset)

    def targets(self, state, label):
        """
        Returns the frozenset of destinations of the edges labeled ``label``
        leaving ``state``. This is empty if there are none.
        """
        trans = self._transitions.get(state)
        if not trans:
            return frozenset()
        return trans.get(symbol_label(label), frozenset())

    def as_dict(self):
        return {
            "transitions": {
                src: {label: set(dests) for label, dests in trans.items()}
                for src, trans in self._transitions.items()
            },
            "start": self.start,
            "accept_states": set(self.accept_states),
        }
