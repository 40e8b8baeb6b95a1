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

from loguru import logger

from minautomata.description import EPSILON, NFADescription


class NFA:
    """
    Nondeterministic Finite Automaton (NFA) engine with epsilon moves.

    Wraps an immutable :class:`NFADescription`. Missing edges are not errors:
    looking one up gives an empty set.

    Example:
        >>> nfa = NFA.from_mapping(
        ...     {"A": {0: ["B"], 1: ["A"]}, "B": {1: ["A"]}},
        ...     start="A",
        ...     accept_states=["A", "B"],
        ... )
        >>> nfa.accepts("0101")
        True
        >>> nfa.accepts("00")
        False
    """

    def __init__(self, description):
        self.description = description

    @classmethod
    def from_mapping(cls, transitions, start, accept_states, **kwargs):
        return cls(NFADescription(transitions, start, accept_states, **kwargs))

    def __len__(self):
        return len(self.description)

    def __eq__(self, other):
        if not isinstance(other, NFA):
            return NotImplemented
        return self.description == other.description

    def __repr__(self):
        return f"<NFA {self.description!r}>"

    @property
    def states(self):
        return self.description.states

    def dump(self, stream=sys.stdout):
        """
        Prints a textual representation of the NFA to the specified stream.
        """
        desc = self.description
        for src in desc.states:
            beg = "@" if src == desc.start else " "
            end = "||" if desc.is_final(src) else ""
            print(beg, f"{src}{end}", file=stream)
            for label in desc.labels(src):
                dests = sorted(desc.targets(src, label), key=repr)
                print("  ", label, "->", ", ".join(map(str, dests)), file=stream)

    def transition(self, state, symbol):
        """
        Returns the frozenset of states reached from ``state`` on ``symbol``
        (which may be :data:`EPSILON`). Empty if there is no such edge.
        """
        return self.description.targets(state, symbol)

    def epsilon_closure(self, state):
        """
        Returns the frozenset of states reachable from ``state`` by following
        zero or more epsilon edges. ``state`` itself is always included.
        """
        return self.closure((state,))

    def closure(self, states):
        """
        Expands a set of states by following epsilon transitions.

        Each state is expanded at most once, so epsilon cycles are harmless.
        """
        seen = set(states)
        frontier = list(seen)
        while frontier:
            state = frontier.pop()
            for dest in self.transition(state, EPSILON):
                if dest not in seen:
                    seen.add(dest)
                    frontier.append(dest)
        return frozenset(seen)

    def step(self, states, symbol):
        """
        Returns the closure of every state reachable from ``states`` by one
        edge labeled ``symbol``.
        """
        dest_states = set()
        for state in states:
            dest_states.update(self.transition(state, symbol))
        return self.closure(dest_states)

    def is_final(self, states):
        """
        Checks if any of the given states is an accept state.
        """
        return not self.description.accept_states.isdisjoint(states)

    def accepts(self, string):
        """
        Checks if some path through the automaton reads the whole input and
        ends in an accept state.

        The search walks configurations ``(state, position)``: epsilon edges
        keep the position, other edges consume the symbol at it. Every
        configuration is visited at most once, so the search ends even when
        epsilon edges form cycles. A configuration at the end of the input is
        good if an accept state is in its epsilon closure.

        Args:
            string (str or iterable): The input symbols.

        Returns:
            bool: True if any path accepts.
        """
        symbols = list(string)
        end = len(symbols)
        start = (self.description.start, 0)
        stack = [start]
        seen = {start}
        while stack:
            state, pos = stack.pop()
            if pos == end and self.is_final(self.epsilon_closure(state)):
                logger.debug("Accepted after {} configurations", len(seen))
                return True

            moves = [(dest, pos) for dest in self.transition(state, EPSILON)]
            if pos < end:
                moves.extend(
                    (dest, pos + 1) for dest in self.transition(state, symbols[pos])
                )
            for config in moves:
                if config not in seen:
                    seen.add(config)
                    stack.append(config)

        logger.debug("Rejected after {} configurations", len(seen))
        return False

    # Alias
    accepted = accepts
