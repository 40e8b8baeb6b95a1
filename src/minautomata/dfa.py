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

import sys

from minautomata.description import DFADescription
from minautomata.minimize import CONCAT, minimize_description


class DFA:
    """
    Deterministic Finite Automaton (DFA) engine.

    Wraps an immutable :class:`DFADescription` and answers membership queries
    over it. The only derived operation, :meth:`minimize`, returns a new
    engine.

    Attributes:
        description (DFADescription): The automaton this engine runs.
        membership (dict or None): For an engine returned by
            :meth:`minimize`, maps each state to the frozenset of states of the
            original automaton it was merged from. ``None`` otherwise.

    Example:
        >>> dfa = DFA.from_mapping(
        ...     {"A": {0: "A", 1: "B"}, "B": {0: "C", 1: "A"}, "C": {0: "B", 1: "C"}},
        ...     start="A",
        ...     accept_states=["A"],
        ... )
        >>> dfa.accepts("110000")
        True
        >>> dfa.accepts("10")
        False
    """

    def __init__(self, description, membership=None):
        self.description = description
        self.membership = membership

    @classmethod
    def from_mapping(cls, transitions, start, accept_states, **kwargs):
        """
        Builds the description from plain containers and wraps it.

        Keyword arguments (``alphabet``) are passed to
        :class:`DFADescription`.
        """
        return cls(DFADescription(transitions, start, accept_states, **kwargs))

    def __len__(self):
        return len(self.description)

    def __eq__(self, other):
        if not isinstance(other, DFA):
            return NotImplemented
        return self.description == other.description

    def __repr__(self):
        return f"<DFA {self.description!r}>"

    @property
    def states(self):
        return self.description.states

    @property
    def start(self):
        return self.description.start

    @property
    def accept_states(self):
        return self.description.accept_states

    def dump(self, stream=sys.stdout):
        """
        Prints a textual representation of the DFA to the specified stream.

        The start state is marked with ``@`` and final states with ``||``::

            @ S
              0 -> A||
              1 -> B
        """
        desc = self.description
        for src in desc.states:
            beg = "@" if src == desc.start else " "
            end = "||" if desc.is_final(src) else ""
            print(beg, f"{src}{end}", file=stream)
            for label in desc.labels(src):
                dest = desc.target(src, label)
                end = "||" if desc.is_final(dest) else ""
                print("  ", label, "->", f"{dest}{end}", file=stream)

    def transition(self, state, symbol):
        """
        Returns the state reached from ``state`` on ``symbol``.

        Raises:
            MalformedAutomatonError: If the table has no entry for the pair.
        """
        return self.description.target(state, symbol)

    def accepts(self, string):
        """
        Checks if a given input is accepted by the automaton.

        Args:
            string (str or iterable): The input symbols, e.g. ``"0110"`` or
                ``[0, 1, 1, 0]``.

        Returns:
            bool: True if reading the whole input from the start state ends in
            an accept state. The empty input is accepted if the start state is
            an accept state.

        Raises:
            MalformedAutomatonError: If the run needs a missing transition.
        """
        state = self.description.start
        for label in string:
            state = self.transition(state, label)
        return self.description.is_final(state)

    def minimize(self, naming=CONCAT):
        """
        Returns a new engine for the minimal equivalent automaton.

        This engine and its description are left as they are. The returned
        engine's ``membership`` records which original states each new state
        stands for.

        Args:
            naming (str, optional): ``"concat"`` (default) names a merged
                state by joining its members' names, e.g. ``"DC"``;
                ``"sequential"`` numbers the new states from 0.
        """
        result = minimize_description(self.description, naming=naming)
        return DFA(result.description, membership=result.membership)
