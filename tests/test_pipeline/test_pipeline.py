"""Tests for the compile/build pipeline seams."""

import json

import pytest

from silkcss.config import LayerConfig, SilkConfig
from silkcss.errors import ConfigError
from silkcss.model.declaration import Declaration
from silkcss.naming import class_name
from silkcss.pipeline import (
    build_output,
    compile_class_name,
    compile_style,
    compile_unit,
    load_registry,
    save_registry,
)
from silkcss.registry import AtomicRegistry
from silkcss.runtime import ObjectPool


@pytest.fixture
def registry():
    return AtomicRegistry()


# ---------------------------------------------------------------------------
# compile_style
# ---------------------------------------------------------------------------


class TestCompileStyle:
    def test_single_atom(self, registry):
        result = compile_style({"padding": 4}, registry)
        identifier = class_name(Declaration("padding", "1rem"))
        assert result.class_name == identifier
        assert result.resolved
        assert registry.generate_css() == f".{identifier}{{padding:1rem}}"

    def test_sides_merged_before_registration(self, registry):
        result = compile_style(
            {"paddingTop": 4, "paddingRight": 8, "paddingBottom": 4, "paddingLeft": 8}, registry
        )
        assert result.declarations == [
            Declaration("padding-block", "1rem"),
            Declaration("padding-inline", "2rem"),
        ]
        assert result.merged == 2
        assert len(result.identifiers) == 2
        assert len(registry) == 2

    def test_hover_atom(self, registry):
        result = compile_style({"color": "red", "_hover": {"color": "blue"}}, registry)
        assert len(result.identifiers) == 2
        rules = [text for _, text in registry.rule_pairs()]
        assert rules[1] == f".{result.identifiers[1]}:hover{{color:blue}}"

    def test_nested_at_rules_stay_distinct(self, registry):
        nested = compile_style({"@media a": {"@supports b": {"color": "red"}}}, registry)
        flat = compile_style({"@media a@supports b": {"color": "red"}}, registry)
        assert nested.identifiers != flat.identifiers
        assert len(registry) == 2
        rules = [text for _, text in registry.rule_pairs()]
        assert rules[0] == f"@media a{{@supports b{{.{nested.class_name}{{color:red}}}}}}"
        assert rules[1] == f"@media a@supports b{{.{flat.class_name}{{color:red}}}}"

    def test_class_string_order_follows_declarations(self, registry):
        result = compile_style({"display": "flex", "color": "red"}, registry)
        assert result.class_name.split() == result.identifiers
        assert [d.property for d in result.declarations] == ["display", "color"]

    def test_partial_result(self, registry):
        result = compile_style({"color": "red", "card": {"color": "blue"}}, registry, origin="a.py:3")
        assert result.partial
        assert result.unresolved_keys == ["card"]
        assert len(result.identifiers) == 1
        data = result.to_dict()
        assert data["resolved"] is False
        assert data["diagnostics"][0]["rule"] == "unsupported-key"
        assert data["diagnostics"][0]["origin"] == "a.py:3"

    def test_oversized_number_dropped(self, registry):
        result = compile_style({"width": 10**400, "color": "red"}, registry)
        assert result.unresolved_keys == ["width"]
        assert [d.property for d in result.declarations] == ["color"]
        assert result.diagnostics[0].rule == "check_finite_number"

    def test_empty_style(self, registry):
        result = compile_style({}, registry)
        assert result.class_name == ""
        assert result.resolved

    def test_config_overrides_registry_config(self, registry):
        config = SilkConfig(spacing_multiplier=0.5)
        result = compile_style({"margin": 2}, registry, config)
        assert result.declarations == [Declaration("margin", "1rem")]


class TestCompileClassName:
    def test_matches_compile_style(self, registry):
        style = {"color": "red", "_hover": {"color": "blue"}}
        class_name, diagnostics = compile_class_name(style, registry)
        assert class_name == compile_style(style, AtomicRegistry()).class_name
        assert diagnostics == []

    def test_buffer_goes_back_to_pool_empty(self, registry):
        pool = ObjectPool(4)
        first, _ = compile_class_name({"color": "red", "display": "flex"}, registry, pool=pool)
        second, _ = compile_class_name({"color": "blue"}, registry, pool=pool)
        assert len(first.split()) == 2
        assert second == class_name(Declaration("color", "blue"))
        assert pool.stats() == {"available": 1, "max_size": 4, "created": 1, "reused": 1}
        assert pool.acquire() == []

    def test_diagnostics_returned(self, registry):
        _, diagnostics = compile_class_name({"color": "red", "card": {"x": 1}}, registry)
        assert [d.rule for d in diagnostics] == ["unsupported-key"]


class TestCompileUnit:
    def test_results_in_order(self, registry):
        unit = compile_unit(
            [({"color": "red"}, "a.py:1"), ({"color": "red", "bogus": {"x": 1}}, "a.py:2")],
            registry,
        )
        assert [r.origin for r in unit.results] == ["a.py:1", "a.py:2"]
        assert unit.results[0].class_name == unit.results[1].class_name
        assert not unit.resolved
        assert unit.partial_results == [unit.results[1]]
        assert all(d.origin == "a.py:2" for d in unit.diagnostics)
        assert registry.usage(unit.results[0].class_name) == 2


# ---------------------------------------------------------------------------
# build_output
# ---------------------------------------------------------------------------


class TestBuildOutput:
    def test_layered_stylesheet(self, registry):
        result = compile_style({"color": "red"}, registry)
        output = build_output(registry)
        assert output.stylesheet.startswith("@layer reset, tokens, base, utilities, overrides;")
        assert f".{result.class_name}{{color:red}}" in output.stylesheet
        assert output.pairs == registry.rule_pairs()

    def test_unlayered(self, registry):
        compile_style({"color": "red"}, registry)
        config = SilkConfig(layers=LayerConfig(enabled=False))
        assert build_output(registry, config).stylesheet == registry.generate_css()

    def test_extra_rules_first(self, registry):
        compile_style({"color": "red"}, registry)
        config = SilkConfig(layers=LayerConfig(enabled=False))
        output = build_output(registry, config, extra_rules="header{display:flex}")
        assert output.stylesheet.splitlines()[0] == "header{display:flex}"
        assert output.critical_css == "header{display:flex}"
        assert output.non_critical_css == registry.generate_css()

    def test_no_critical_rules(self, registry):
        compile_style({"color": "red"}, registry)
        output = build_output(registry)
        assert output.critical_css == ""
        assert output.partition.report.critical_rules == 0

    def test_to_dict_is_json_ready(self, registry):
        compile_style({"color": "red"}, registry)
        data = build_output(registry).to_dict()
        assert set(data) == {"stylesheet", "rules", "stats", "critical"}
        json.dumps(data)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


class TestPersistence:
    def test_save_and_load(self, registry, tmp_path):
        compile_style({"color": "red", "_hover": {"color": "blue"}}, registry)
        path = tmp_path / "state" / "registry.json"
        save_registry(registry, path)
        loaded = load_registry(path)
        assert loaded.generate_css() == registry.generate_css()

    def test_load_into_existing(self, registry, tmp_path):
        compile_style({"color": "red"}, registry)
        path = tmp_path / "registry.json"
        save_registry(registry, path)
        target = AtomicRegistry()
        assert load_registry(path, registry=target) is target
        assert len(target) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read registry"):
            load_registry(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_registry(path)
