# tests/rules/test_rule_registry.py
import pytest

from a11yscan.dom.core import ElementNode
from a11yscan.exceptions import RuleEvaluationError
from a11yscan.model import AccessibilityIssue
from a11yscan.rules.core import AccessibilityRule, audit_spec
from a11yscan.rules.registry import RuleRegistry

TREE = ElementNode(tag="#document", children=[ElementNode(tag="p", text="x")])


def constant_rule(name, issue_type, order=100):
    @audit_spec(types=[issue_type])
    def check(tree):
        return [AccessibilityIssue(type=issue_type, message=name, severity="low")]
    return AccessibilityRule(name=name, check=check, order=order)


def broken_check(tree):
    raise AttributeError("node has no children")


def test_default_registry_discovers_builtin_rules_in_order():
    registry = RuleRegistry.default()

    assert registry.names() == ["Missing Alt Text", "Heading Level Hierarchy", "Semantic Structure"]
    assert registry.issue_types() == ["heading-hierarchy", "missing-alt", "non-semantic"]


def test_default_registry_is_cached():
    assert RuleRegistry.default() is RuleRegistry.default()


def test_evaluate_concatenates_in_registration_order():
    registry = RuleRegistry([constant_rule("B", "b"), constant_rule("A", "a")])

    issues = registry.evaluate(TREE)

    assert [i.type for i in issues] == ["b", "a"]


def test_extended_returns_new_registry():
    base = RuleRegistry([constant_rule("A", "a")])

    extended = base.extended(constant_rule("B", "b"))

    assert base.names() == ["A"]
    assert extended.names() == ["A", "B"]
    assert len(extended) == 2


def test_rules_are_isolated_from_each_other():
    registry = RuleRegistry([constant_rule("A", "a"), constant_rule("B", "b")])

    alone = [RuleRegistry([rule]).evaluate(TREE) for rule in registry]
    together = registry.evaluate(TREE)

    assert [i for part in alone for i in part] == together


def test_evaluate_propagates_rule_errors():
    registry = RuleRegistry([AccessibilityRule(name="Broken", check=broken_check)])

    with pytest.raises(AttributeError):
        registry.evaluate(TREE)


def test_evaluate_isolated_skips_failing_rule():
    registry = RuleRegistry([
        constant_rule("A", "a"),
        AccessibilityRule(name="Broken", check=broken_check),
        constant_rule("B", "b"),
    ])

    issues, errors = registry.evaluate_isolated(TREE)

    assert [i.type for i in issues] == ["a", "b"]
    assert len(errors) == 1
    assert isinstance(errors[0], RuleEvaluationError)
    assert errors[0].rule_name == "Broken"
    assert isinstance(errors[0].cause, AttributeError)


def test_generator_checks_are_materialized_inside_the_boundary():
    def lazy_broken(tree):
        yield AccessibilityIssue(type="x", message="m", severity="low")
        raise ValueError("late failure")

    registry = RuleRegistry([AccessibilityRule(name="Lazy", check=lazy_broken)])

    issues, errors = registry.evaluate_isolated(TREE)

    assert issues == []
    assert [e.rule_name for e in errors] == ["Lazy"]


def test_discover_orders_by_rule_order():
    registry = RuleRegistry.discover()

    assert [r.order for r in registry] == sorted(r.order for r in registry)


def test_discover_missing_package_gives_empty_registry():
    registry = RuleRegistry.discover("a11yscan.rules.does_not_exist")

    assert len(registry) == 0


def test_rule_collects_declared_issue_types():
    rule = AccessibilityRule(name="A", check=constant_rule("A", "a").check, issue_types=["extra"])

    assert rule.issue_types == ("a", "extra")
