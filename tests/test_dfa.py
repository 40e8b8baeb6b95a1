import io

import pytest
from minautomata.description import DFADescription, MalformedAutomatonError
from minautomata.dfa import DFA

machines = {
    "starts_with_0": {
        "transitions": {
            "S": {0: "A", 1: "B"},
            "A": {0: "A", 1: "A"},
            "B": {0: "B", 1: "B"},
        },
        "start": "S",
        "accept_states": ["A"],
        "accepted": ["0", "01", "00000", "0111111"],
        "rejected": ["", "10", "10001010", "111111", "101111"],
    },
    "divisible_by_3": {
        "transitions": {
            "A": {0: "A", 1: "B"},
            "B": {0: "C", 1: "A"},
            "C": {0: "B", 1: "C"},
        },
        "start": "A",
        "accept_states": ["A"],
        "accepted": ["0", "", "11", "00000", "110000", "101111111101"],
        "rejected": ["10", "1010", "100000", "1011111"],
    },
    "starts_with_010": {
        "transitions": {
            "A": {0: "B", 1: "C"},
            "B": {0: "C", 1: "D"},
            "C": {0: "C", 1: "C"},
            "D": {0: "F", 1: "E"},
            "E": {0: "E", 1: "E"},
            "F": {0: "F", 1: "F"},
        },
        "start": "A",
        "accept_states": ["F"],
        "accepted": ["010", "010000", "010111", "010010"],
        "rejected": ["1000", "1", "111"],
    },
}


def make_dfa(name):
    m = machines[name]
    return DFA.from_mapping(m["transitions"], m["start"], m["accept_states"])


@pytest.mark.parametrize("name", sorted(machines))
def test_transition(name):
    dfa = make_dfa(name)
    for state, trans in machines[name]["transitions"].items():
        for label, dest in trans.items():
            assert dfa.transition(state, label) == dest
            assert dfa.transition(state, str(label)) == dest


@pytest.mark.parametrize("name", sorted(machines))
def test_accepts(name):
    dfa = make_dfa(name)
    for s in machines[name]["accepted"]:
        assert dfa.accepts(s), s
    for s in machines[name]["rejected"]:
        assert not dfa.accepts(s), s


def test_accepts_symbol_sequence():
    dfa = make_dfa("divisible_by_3")
    assert dfa.accepts([1, 1, 0, 0, 0, 0])
    assert not dfa.accepts((1, 0))
    assert dfa.accepts([])


def test_empty_input():
    assert not make_dfa("starts_with_0").accepts("")
    assert make_dfa("divisible_by_3").accepts("")


def test_len_and_states():
    dfa = make_dfa("starts_with_010")
    assert len(dfa) == 6
    assert dfa.states == ("A", "B", "C", "D", "E", "F")
    assert dfa.start == "A"
    assert dfa.accept_states == frozenset(["F"])


def test_missing_transition():
    dfa = DFA.from_mapping({"A": {0: "B"}, "B": {0: "A", 1: "A"}}, "A", ["B"])
    assert dfa.accepts("0")
    with pytest.raises(MalformedAutomatonError):
        dfa.accepts("1")
    with pytest.raises(MalformedAutomatonError):
        dfa.transition("A", 1)


def test_undeclared_state_lookup():
    dfa = make_dfa("starts_with_0")
    with pytest.raises(MalformedAutomatonError):
        dfa.transition("Z", 0)


def test_target_outside_table():
    # The run only fails when it reaches the undeclared state
    dfa = DFA.from_mapping({"A": {0: "A", 1: "Z"}}, "A", ["A"])
    assert dfa.accepts("000")
    assert not dfa.accepts("1")
    with pytest.raises(MalformedAutomatonError):
        dfa.accepts("10")


def test_symbol_outside_alphabet():
    dfa = make_dfa("starts_with_0")
    with pytest.raises(MalformedAutomatonError):
        dfa.accepts("02")


def test_equality():
    assert make_dfa("starts_with_0") == make_dfa("starts_with_0")
    assert make_dfa("starts_with_0") != make_dfa("divisible_by_3")


def test_dump():
    out = io.StringIO()
    make_dfa("starts_with_0").dump(stream=out)
    lines = out.getvalue().splitlines()
    assert lines[0] == "@ S"
    assert "0 -> A||" in lines[1]
    assert "1 -> B" in lines[2]
    assert "  A||" in lines


def test_minimize_returns_new_engine():
    dfa = make_dfa("starts_with_010")
    before = DFADescription(
        machines["starts_with_010"]["transitions"], "A", ["F"]
    )
    mdfa = dfa.minimize()
    assert isinstance(mdfa, DFA)
    assert mdfa is not dfa
    assert dfa.description == before
    assert len(dfa) == 6
    assert len(mdfa) == 5
    assert dfa.membership is None
    assert mdfa.membership["CE"] == frozenset(["C", "E"])
