import pytest

from pypropman import Namespace
from pypropman.store import MacroResolver, ResolutionPolicy, ResolutionResult

A, B = Namespace('a'), Namespace('b')


def test_all_namespaces_resolves_across_namespaces():
    resolver = MacroResolver(policy=ResolutionPolicy.ALL_NAMESPACES)
    data = {A: {'x': '1'}}
    assert resolver.resolve(data, B, 'v=##x##') == ResolutionResult('v=1', True)


def test_first_namespace_in_id_order_wins():
    resolver = MacroResolver()
    data = {B: {'x': 'from b'}, A: {'x': 'from a'}}
    assert resolver.resolve(data, B, '##x##').value == 'from a'


def test_within_namespace_keeps_foreign_references():
    resolver = MacroResolver(policy=ResolutionPolicy.WITHIN_NAMESPACE)
    data = {A: {'x': '1'}, B: {'y': '2'}}
    result = resolver.resolve(data, B, '##x## ##y##')
    assert result.value == '##x## 2'
    assert result.found_replacement


def test_unresolved_reference_still_counts_as_found():
    result = MacroResolver().resolve({}, A, 'a ##nope## b')
    assert result == ResolutionResult('a ##nope## b', True)


def test_plain_value_is_untouched():
    assert MacroResolver().resolve({A: {'x': '1'}}, A, 'x') == \
        ResolutionResult('x', False)


def test_policy_none_disables_scanning():
    resolver = MacroResolver(policy=ResolutionPolicy.NONE)
    assert resolver.resolve({A: {'x': '1'}}, A, '##x##') == \
        ResolutionResult('##x##', False)


def test_replacement_is_inserted_literally():
    data = {A: {'x': r'C:\1 costs $5'}}
    assert MacroResolver().resolve(data, A, '[##x##]').value == \
        r'[C:\1 costs $5]'


def test_custom_pattern():
    resolver = MacroResolver(r'\$\{(.+?)\}')
    data = {A: {'x': '1'}}
    assert resolver.resolve(data, A, '${x} ##x##').value == '1 ##x##'
    assert resolver.references('${x}${y}') == ['x', 'y']


def test_pattern_needs_a_group():
    with pytest.raises(ValueError):
        MacroResolver('##.+?##')
    with pytest.raises(ValueError):
        MacroResolver(policy=None)


def test_none_arguments():
    with pytest.raises(ValueError):
        MacroResolver().resolve({}, None, 'x')
    with pytest.raises(ValueError):
        MacroResolver().resolve({}, A, None)


def test_locate():
    resolver = MacroResolver(policy=ResolutionPolicy.WITHIN_NAMESPACE)
    data = {A: {'x': '1'}}
    assert resolver.locate(data, A, 'x') == A
    assert resolver.locate(data, B, 'x') is None
