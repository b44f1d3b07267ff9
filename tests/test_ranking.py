import pytest

from hygiene_core import ranking


def test_dense_ranking_ties_share_rank_without_gaps():
    pairs = [("a", -2), ("b", 0), ("c", 0), ("d", -1), ("e", -2)]
    ranks = ranking.rank_totals(pairs, method="dense")
    assert ranks == {"b": 1, "c": 1, "d": 2, "a": 3, "e": 3}


def test_dense_ranks_form_contiguous_run():
    totals = [0, 0, 0, -1, -3, -3, -7, -7, -7, -7, -8]
    ranks = ranking.rank_totals(list(enumerate(totals)))
    distinct = len(set(totals))
    assert set(ranks.values()) == set(range(1, distinct + 1))
    for i, ti in enumerate(totals):
        for j, tj in enumerate(totals):
            if ti == tj:
                assert ranks[i] == ranks[j]
            elif ti > tj:
                assert ranks[i] < ranks[j]


def test_skip_ranking_advances_by_tie_group_size():
    pairs = [("a", 0), ("b", 0), ("c", -1), ("d", -2)]
    assert ranking.rank_totals(pairs, method="skip") == {"a": 1, "b": 1, "c": 3, "d": 4}


def test_empty_input_yields_empty_mapping():
    assert ranking.rank_totals([]) == {}


def test_tuple_keys_are_preserved():
    ranks = ranking.rank_totals([((1, "A"), -3), ((1, "B"), 0)])
    assert ranks == {(1, "A"): 2, (1, "B"): 1}


def test_duplicate_keys_rejected():
    with pytest.raises(ValueError):
        ranking.rank_totals([("a", 0), ("a", -1)])


def test_unknown_method_rejected():
    with pytest.raises(ValueError):
        ranking.rank_totals([("a", 0)], method="olympic")
