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
DFA minimization by partition refinement (Moore's algorithm).

States start out split into accepting and non-accepting classes. Every round
computes, for each state, the classes its transitions lead to under the
current partition, and splits each class by that signature. Splitting only
happens *inside* an existing class, so two states separated in an earlier
round are never put back together. The rounds stop when a round leaves the
partition unchanged.

The final classes are then projected into a new :class:`DFADescription`.
"""

import itertools
from collections import namedtuple

from loguru import logger

from minautomata.description import DFADescription

CONCAT = "concat"
SEQUENTIAL = "sequential"
NAMING_SCHEMES = (CONCAT, SEQUENTIAL)


Minimization = namedtuple(
    "Minimization", ["description", "membership", "partition", "rounds"]
)
Minimization.__doc__ = """
Result of :func:`minimize_description`.

* ``description`` -- the minimized :class:`DFADescription`.
* ``membership`` -- maps each new state name to the frozenset of original
  states it stands for.
* ``partition`` -- the final list of equivalence classes.
* ``rounds`` -- the number of refinement rounds that were run, including the
  final round that confirmed the partition was stable.
"""


def initial_partition(description):
    """
    Returns the starting partition: the accept states and the non-accept
    states, in declaration order. Empty classes are left out, so an automaton
    whose states are all accepting (or all non-accepting) starts with a
    single class.
    """
    finals = [s for s in description.states if description.is_final(s)]
    others = [s for s in description.states if not description.is_final(s)]
    return [frozenset(part) for part in (finals, others) if part]


def refine(description, partition):
    """
    Runs one refinement round and returns the new partition.

    Two states end up in the same new class only if they were in the same
    class of ``partition`` and, for every symbol of the alphabet, their
    transitions lead into the same class of ``partition``.

    Args:
        description (DFADescription): The automaton being minimized.
        partition (list): A list of frozensets of states.

    Returns:
        list: The refined partition, as a list of frozensets. Classes are
        ordered by the declaration order of their first member.
    """
    index = {}
    for i, part in enumerate(partition):
        for state in part:
            index[state] = i

    groups = {}
    for state in description.states:
        signature = tuple(
            index[description.target(state, label)] for label in description.alphabet
        )
        # Keying on the old class keeps earlier splits in place
        groups.setdefault((index[state], signature), []).append(state)
    return [frozenset(group) for group in groups.values()]


def equivalence_classes(description):
    """
    Refines the initial partition until it stops changing.

    Returns:
        tuple: ``(partition, rounds)``.
    """
    partition = initial_partition(description)
    rounds = 0
    while True:
        rounds += 1
        refined = refine(description, partition)
        logger.debug(
            "Refinement round {}: {} -> {} classes",
            rounds,
            len(partition),
            len(refined),
        )
        # Compare the classes themselves, equal counts can hide a regrouping
        if set(refined) == set(partition):
            return refined, rounds
        partition = refined


def _ordered(description, part):
    return [s for s in description.states if s in part]


def class_names(description, partition, naming=CONCAT):
    """
    Chooses a name for each class of ``partition``.

    With ``naming="concat"`` a class is named by concatenating the names of
    its members in declaration order (a single member keeps its own name).
    This needs string states and must not produce the same name twice; if
    either fails the sequential scheme is used instead. ``naming="sequential"``
    numbers the classes from 0.

    Returns:
        dict: Maps each class (frozenset) to its name.

    Raises:
        ValueError: If ``naming`` is not a known scheme.
    """
    if naming not in NAMING_SCHEMES:
        raise ValueError(f"Unknown naming scheme {naming!r}, expected one of {NAMING_SCHEMES!r}")

    if naming == CONCAT:
        if all(isinstance(s, str) for s in description.states):
            names = {
                part: "".join(_ordered(description, part)) for part in partition
            }
            if len(set(names.values())) == len(names):
                return names
            logger.warning(
                "Concatenated class names are ambiguous, using sequential names"
            )
        else:
            logger.warning(
                "States are not all strings, using sequential class names"
            )

    c = itertools.count()
    return {part: next(c) for part in partition}


def project(description, partition, naming=CONCAT):
    """
    Builds the minimized description from a stable partition.

    Each class becomes one state. Its transitions are read from any one member
    and mapped through the partition, it accepts if any member accepts, and
    the class containing the old start state is the new start state.

    Returns:
        tuple: ``(DFADescription, membership)`` where ``membership`` maps each
        new state to the frozenset of original states.
    """
    names = class_names(description, partition, naming)
    mapping = {}
    for part, name in names.items():
        for state in part:
            mapping[state] = name

    new_trans = {}
    new_finals = set()
    for part in partition:
        name = names[part]
        representative = _ordered(description, part)[0]
        new_trans[name] = {
            label: mapping[description.target(representative, label)]
            for label in description.alphabet
        }
        if description.accept_states.intersection(part):
            new_finals.add(name)

    minimized = DFADescription(
        new_trans,
        mapping[description.start],
        new_finals,
        alphabet=description.alphabet,
    )
    membership = {names[part]: part for part in partition}
    return minimized, membership


def minimize_description(description, naming=CONCAT):
    """
    Minimizes a deterministic automaton description.

    States that can't be told apart by any input are merged. Unreachable
    states are merged like any others but are not removed.

    Args:
        description (DFADescription): The automaton to minimize. It is not
            changed.
        naming (str, optional): ``"concat"`` or ``"sequential"``, see
            :func:`class_names`.

    Returns:
        Minimization: The minimized description and how it was derived.

    Raises:
        MalformedAutomatonError: If the transition table is not total or
            points at undeclared states.
    """
    description.check_total()
    partition, rounds = equivalence_classes(description)
    minimized, membership = project(description, partition, naming)
    logger.debug(
        "Minimized {} states to {} in {} rounds",
        len(description),
        len(minimized),
        rounds,
    )
    return Minimization(minimized, membership, partition, rounds)
