import pytest

from query_processing.models.boolean import (
    ScoredResultSet,
    difference,
    intersect,
    search,
    total_relevance,
    union,
)
from query_processing.models.core import Document, InvertedIndex


@pytest.fixture
def cat():
    return ScoredResultSet({"docA": 2, "docB": 1})


@pytest.fixture
def dog():
    return ScoredResultSet({"docA": 3, "docC": 4})


def test_relevance_defaults_to_zero(cat):
    assert cat.relevance("docA") == 2
    assert cat.relevance("missing") == 0


def test_input_mapping_is_copied():
    scores = {"docA": 1}
    results = ScoredResultSet(scores)
    scores["docA"] = 7
    scores["docB"] = 2
    assert results.relevance("docA") == 1
    assert "docB" not in results
    with pytest.raises(TypeError):
        results.scores["docA"] = 3


def test_negative_scores_rejected():
    with pytest.raises(ValueError):
        ScoredResultSet({"docA": -1})


def test_union(cat, dog):
    result = union(cat, dog)
    assert result.documents() == {"docA", "docB", "docC"}
    assert result.scores == {"docA": 5, "docB": 1, "docC": 4}


def test_union_is_commutative(cat, dog):
    assert union(cat, dog) == union(dog, cat)


def test_union_is_associative(cat, dog):
    fish = ScoredResultSet({"docB": 6, "docD": 1})
    assert union(union(cat, dog), fish) == union(cat, union(dog, fish))


def test_intersect_keeps_left_documents_at_zero(cat, dog):
    result = intersect(cat, dog)
    assert result.scores == {"docA": 5, "docB": 0}
    assert result.matches() == {"docA"}


def test_intersect_is_driven_by_left_operand(cat, dog):
    assert "docC" not in intersect(cat, dog)
    assert intersect(dog, cat).scores == {"docA": 5, "docC": 0}


@pytest.mark.parametrize("left, right", [
    ({"docA": 0, "docB": 2}, {"docA": 4, "docB": 1}),
    ({"docA": 3}, {}),
    ({}, {"docA": 3}),
])
def test_intersect_zero_when_either_side_is_zero(left, right):
    a, b = ScoredResultSet(left), ScoredResultSet(right)
    result = intersect(a, b)
    for url in set(left) | set(right):
        if a.relevance(url) == 0 or b.relevance(url) == 0:
            assert result.relevance(url) == 0


def test_difference_drops_matching_documents():
    a = ScoredResultSet({"docA": 2, "docB": 1, "docC": 0})
    b = ScoredResultSet({"docA": 5, "docC": 0})
    result = difference(a, b)
    assert result.scores == {"docB": 1, "docC": 0}
    assert "docA" not in result


def test_combinators_leave_operands_untouched(cat, dog):
    cat.union(dog)
    cat.intersect(dog)
    cat.difference(dog)
    assert cat.scores == {"docA": 2, "docB": 1}
    assert dog.scores == {"docA": 3, "docC": 4}


def test_method_aliases(cat, dog):
    assert cat.or_(dog) == cat.union(dog)
    assert cat.and_(dog) == cat.intersect(dog)
    assert cat.minus(dog) == cat.difference(dog)


def test_pluggable_combiner(cat, dog):
    cat = ScoredResultSet(cat.scores, combiner=max)
    assert cat.union(dog).scores == {"docA": 3, "docB": 1, "docC": 4}
    assert cat.intersect(dog).scores == {"docA": 3, "docB": 0}
    assert cat.union(dog).combiner is max


@pytest.mark.parametrize("rel1, rel2", [(0, 0), (0, 3), (2, 5), (7, 1)])
def test_total_relevance(rel1, rel2):
    assert total_relevance(rel1, rel2) == rel1 + rel2
    assert total_relevance(rel1, rel2) == total_relevance(rel2, rel1)
    assert total_relevance(rel1 + 1, rel2) >= total_relevance(rel1, rel2)


def test_sort_ascending(cat):
    assert cat.sort() == [("docB", 1), ("docA", 2)]


def test_sort_is_stable_and_non_decreasing():
    results = ScoredResultSet({"u1": 3, "u2": 0, "u3": 3, "u4": 1, "u5": 0})
    ranked = results.sort()
    assert ranked == [("u2", 0), ("u5", 0), ("u4", 1), ("u1", 3), ("u3", 3)]
    scores = [score for _, score in ranked]
    assert scores == sorted(scores)


def test_search_wraps_index_counts():
    index = InvertedIndex([
        Document("docA", "Java is a programming language. Java!"),
        Document("docB", "Coffee from Java"),
    ])
    assert search("java", index).scores == {"docA": 2, "docB": 1}
    assert search("python", index).scores == {}


def test_inverted_index_put_counts_replaces_document():
    index = InvertedIndex([Document("docA", "java coffee java")])
    assert index.get_counts("java") == {"docA": 2}
    index.put_counts("docA", {"python": 1})
    assert index.get_counts("java") == {}
    assert index.terms() == ["python"]
    assert index.urls() == ["docA"]


def test_inverted_index_rejected_update_keeps_old_counts():
    index = InvertedIndex([Document("docA", "java java coffee")])
    with pytest.raises(ValueError):
        index.put_counts("docA", {"python": 1, "bad": -1})
    assert index.get_counts("java") == {"docA": 2}
    assert index.get_counts("coffee") == {"docA": 1}
    assert index.get_counts("python") == {}
