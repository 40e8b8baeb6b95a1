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
Comparing deterministic automata independently of how their states are named.

Two minimizations of the same automaton can be the same machine under
different names, so comparing descriptions directly is too strict.
:func:`same_structure` compares canonical forms instead, and
:func:`equivalent` checks that two automata accept the same language.
"""

import itertools
from collections import deque

from minautomata.dfa import DFA


def _description(automaton):
    if isinstance(automaton, DFA):
        return automaton.description
    return automaton


def canonical_form(automaton):
    """
    Renumbers the states of a DFA by breadth-first discovery order.

    The start state is 0, and the search visits labels in alphabet order, so
    two automata that differ only in state names get the same form.

    Args:
        automaton (DFA or DFADescription): The automaton to renumber.

    Returns:
        tuple: ``(transitions, accept_states, unreachable)`` where
        ``transitions`` is a tuple of per-state tuples of target numbers,
        ``accept_states`` is a frozenset of numbers and ``unreachable`` is the
        number of declared states that can't be reached from the start.
    """
    desc = _description(automaton)
    c = itertools.count()
    mapping = {}

    def remap(state):
        if state not in mapping:
            mapping[state] = next(c)
            queue.append(state)
        return mapping[state]

    queue = deque()
    remap(desc.start)
    rows = []
    while queue:
        src = queue.popleft()
        rows.append(tuple(remap(desc.target(src, label)) for label in desc.alphabet))

    finals = frozenset(mapping[s] for s in desc.accept_states if s in mapping)
    return tuple(rows), finals, len(desc) - len(mapping)


def same_structure(a, b):
    """
    Returns True if the two DFAs have the same alphabet and are the same
    automaton up to renaming of states.
    """
    da = _description(a)
    db = _description(b)
    return da.alphabet == db.alphabet and canonical_form(da) == canonical_form(db)


def equivalent(a, b):
    """
    Returns True if the two DFAs accept exactly the same inputs.

    Walks the pairs of states the two automata can be in after reading the
    same input, starting from the pair of start states, and looks for a pair
    where one accepts and the other does not.
    """
    da = _description(a)
    db = _description(b)
    if da.alphabet != db.alphabet:
        return False

    start = (da.start, db.start)
    stack = [start]
    seen = {start}
    while stack:
        state1, state2 = stack.pop()
        if da.is_final(state1) != db.is_final(state2):
            return False
        for label in da.alphabet:
            dest = (da.target(state1, label), db.target(state2, label))
            if dest not in seen:
                seen.add(dest)
                stack.append(dest)
    return True
