"""
Unit tests for the structured clause records.
"""

from ff_query.db.query_builder import InPredicate, Join, Predicate
from ff_query.db.query_builder.clauses import render_conditions


def test_predicate_render():
    """Test a comparison renders one placeholder and one value."""
    assert Predicate("age", ">", 18).render() == ("age > ?", [18])


def test_predicate_falsy_values_are_bound():
    """Test 0, empty string and False are bound rather than treated as NULL."""
    for value in (0, "", False):
        assert Predicate("flag", "=", value).render() == ("flag = ?", [value])


def test_in_predicate_render():
    """Test IN renders a placeholder per value."""
    assert InPredicate("id", (1, 2)).render() == ("id IN (?, ?)", [1, 2])
    assert InPredicate("id").render() == ("1 = 0", [])


def test_join_render():
    """Test JOIN renders the ON condition against the recorded local table."""
    join = Join("LEFT", "orders", "user_id", "=", "users", "id")
    assert join.render() == "LEFT JOIN orders ON users.id = orders.user_id"


def test_render_conditions():
    """Test keyword prefix, AND joining and value collection."""
    sql, values = render_conditions(
        "WHERE", [Predicate("a", "=", 1), InPredicate("b", ("x", "y")), Predicate("c", "=", None)]
    )
    assert sql == " WHERE a = ? AND b IN (?, ?) AND c IS NULL"
    assert values == [1, "x", "y"]


def test_render_conditions_empty():
    """Test no predicates render nothing."""
    assert render_conditions("HAVING", []) == ("", [])
