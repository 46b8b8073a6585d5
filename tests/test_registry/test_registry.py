"""Tests for the atomic registry."""

import threading

import pytest

from silkcss.config import NamingMode, SilkConfig
from silkcss.errors import ConfigError, HashCollisionError, RegistryInvariantError, SilkError
from silkcss.model.declaration import (
    Condition,
    ConditionKind,
    Declaration,
    SelectorContext,
)
from silkcss.naming import class_name
from silkcss.pipeline import compile_style
from silkcss.registry import AtomicRegistry, build_rule

PADDING = Declaration("padding", "1rem")
COLOR = Declaration("color", "red")
HOVER_BLUE = Declaration("color", "blue", SelectorContext(pseudos=(":hover",)))
MD = Condition(ConditionKind.BREAKPOINT, "md", "@media (min-width:768px)")
MD_PADDING = Declaration("padding", "2rem", SelectorContext(conditions=(MD,)))


@pytest.fixture
def registry():
    return AtomicRegistry()


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestRegistration:
    def test_returns_class_name(self, registry):
        assert registry.register_atom(PADDING) == class_name(PADDING)

    def test_idempotent(self, registry):
        first = registry.register_atom(PADDING)
        second = registry.register_atom(Declaration("padding", "1rem"))
        assert first == second
        assert len(registry) == 1
        assert registry.usage(first) == 2

    def test_rule_text(self, registry):
        identifier = registry.register_atom(PADDING)
        assert registry.generate_css() == f".{identifier}{{padding:1rem}}"

    def test_hover_rule_text(self, registry):
        identifier = registry.register_atom(HOVER_BLUE)
        assert registry.generate_css() == f".{identifier}:hover{{color:blue}}"

    def test_media_rule_text(self, registry):
        identifier = registry.register_atom(MD_PADDING)
        assert registry.generate_css() == f"@media (min-width:768px){{.{identifier}{{padding:2rem}}}}"

    def test_rules_in_first_registration_order(self, registry):
        ids = registry.register_atoms([COLOR, PADDING, COLOR])
        assert [identifier for identifier, _ in registry.rule_pairs()] == [ids[0], ids[1]]

    def test_register_atoms_appends_to_out(self, registry):
        out = ["existing"]
        returned = registry.register_atoms([COLOR, PADDING], out=out)
        assert returned is out
        assert out[1:] == [class_name(COLOR), class_name(PADDING)]

    def test_lookup(self, registry):
        assert registry.lookup(PADDING) is None
        identifier = registry.register_atom(PADDING)
        assert registry.lookup(PADDING) == identifier
        assert identifier in registry
        assert registry.atom_key_for(identifier) == PADDING.atom_key

    def test_build_rule_keeps_wrappers(self):
        rule = build_rule("x", MD_PADDING)
        assert rule.selector == ".x"
        assert rule.wrappers == ("@media (min-width:768px)",)

    def test_compact_naming(self):
        registry = AtomicRegistry(SilkConfig(naming=NamingMode.COMPACT))
        assert registry.register_atom(PADDING).startswith("s")

    def test_concurrent_registration(self, registry):
        def worker():
            for _ in range(100):
                registry.register_atom(PADDING)
                registry.register_atom(COLOR)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 2
        assert registry.usage(registry.lookup(PADDING)) == 800
        assert registry.usage(registry.lookup(COLOR)) == 800


# ---------------------------------------------------------------------------
# Collisions
# ---------------------------------------------------------------------------


class TestCollisions:
    def test_collision_detected(self, registry, monkeypatch):
        monkeypatch.setattr(registry._namer, "name", lambda decl: "silk_same_0")
        registry.register_atom(PADDING)
        with pytest.raises(HashCollisionError) as exc_info:
            registry.register_atom(COLOR)
        assert exc_info.value.identifier == "silk_same_0"
        assert exc_info.value.existing == PADDING.atom_key
        assert exc_info.value.incoming == COLOR.atom_key

    def test_collision_is_invariant_error(self):
        assert issubclass(HashCollisionError, RegistryInvariantError)

    def test_unverified_collision_still_guards_rule_text(self, monkeypatch):
        registry = AtomicRegistry(SilkConfig(verify_hashes=False))
        monkeypatch.setattr(registry._namer, "name", lambda decl: "silk_same_0")
        registry.register_atom(PADDING)
        with pytest.raises(RegistryInvariantError):
            registry.register_atom(COLOR)


# ---------------------------------------------------------------------------
# Statistics and reports
# ---------------------------------------------------------------------------


class TestStats:
    def test_empty(self, registry):
        stats = registry.get_stats()
        assert stats.unique_atoms == 0
        assert stats.total_usage == 0
        assert stats.savings_percentage == 0.0

    def test_rates(self, registry):
        registry.register_atoms([PADDING, PADDING, COLOR])
        stats = registry.get_stats()
        assert stats.unique_atoms == 2
        assert stats.total_usage == 3
        assert stats.deduplication_rate == 1.5
        assert stats.savings_percentage == 33.33
        assert stats.to_dict()["average_reuse"] == 1.5

    def test_top_atoms(self, registry):
        registry.register_atoms([COLOR, PADDING, PADDING, HOVER_BLUE])
        top = registry.get_top_atoms(2)
        assert [atom.usage for atom in top] == [2, 1]
        assert top[0].identifier == registry.lookup(PADDING)
        assert top[1].identifier == registry.lookup(COLOR)
        assert top[0].readable_key == "padding 1rem"

    def test_report(self, registry):
        registry.register_atoms([PADDING, PADDING])
        report = registry.generate_report()
        assert "Unique atoms: 1" in report
        assert "Total usage: 2" in report
        assert "used 2x" in report


# ---------------------------------------------------------------------------
# Export / import / merge
# ---------------------------------------------------------------------------


class TestPersistence:
    def test_export_shape(self, registry):
        identifier = registry.register_atom(PADDING)
        data = registry.export()
        assert data["version"] == 1
        assert data["signature"] == {"naming": "verbose", "prefix": "silk"}
        assert data["atoms"] == [[PADDING.atom_key, identifier]]
        assert data["usage"] == [[identifier, 1]]
        assert data["rules"] == [[identifier, f".{identifier}{{padding:1rem}}"]]

    def test_import_restores_state(self, registry):
        registry.register_atoms([PADDING, MD_PADDING, HOVER_BLUE, PADDING])
        other = AtomicRegistry()
        other.register_atom(COLOR)
        other.import_data(registry.export())
        assert other.generate_css() == registry.generate_css()
        assert other.lookup(COLOR) is None
        assert other.usage(registry.lookup(PADDING)) == 2
        # Imported bindings are reused, not re-created.
        assert other.register_atom(PADDING) == registry.lookup(PADDING)
        assert len(other) == 3

    def test_merge_independent_registries(self):
        first, second = AtomicRegistry(), AtomicRegistry()
        a = compile_style({"backgroundColor": "red"}, first)
        b = compile_style({"backgroundColor": "red"}, second)
        assert a.class_name == b.class_name

        merged = AtomicRegistry()
        merged.merge(first.export())
        merged.merge(second.export())
        assert len(merged) == 1
        assert merged.usage(a.class_name) == 2

    def test_merge_conflicting_rule_text(self, registry):
        identifier = registry.register_atom(PADDING)
        data = registry.export()
        data["rules"] = [[identifier, f".{identifier}{{padding:2rem}}"]]
        with pytest.raises(RegistryInvariantError):
            registry.merge(data)

    def test_merge_collision(self, registry):
        identifier = registry.register_atom(PADDING)
        data = registry.export()
        data["atoms"] = [[COLOR.atom_key, identifier]]
        with pytest.raises(HashCollisionError):
            registry.merge(data)

    def test_failed_import_keeps_state(self, registry):
        identifier = registry.register_atom(PADDING)
        bad = {"atoms": [["k", "x"]], "usage": [["x", 1]], "rules": [["x", ".x{color:red"]]}
        with pytest.raises(SilkError):
            registry.import_data(bad)
        assert len(registry) == 1
        assert registry.lookup(PADDING) == identifier

    def test_failed_merge_changes_nothing(self, registry):
        registry.register_atom(PADDING)
        source = AtomicRegistry()
        color_id = source.register_atom(COLOR)
        data = source.export()
        data["atoms"].append(["k", "y"])
        data["rules"].append(["y", "not a rule"])
        with pytest.raises(SilkError):
            registry.merge(data)
        assert len(registry) == 1
        assert color_id not in registry
        assert registry.get_stats().total_usage == 1

    def test_conflict_late_in_export_changes_nothing(self, registry):
        padding_id = registry.register_atom(PADDING)
        source = AtomicRegistry()
        source.register_atoms([COLOR, PADDING])
        data = source.export()
        data["rules"][1] = [padding_id, f".{padding_id}{{padding:9rem}}"]
        with pytest.raises(RegistryInvariantError):
            registry.merge(data)
        assert len(registry) == 1
        assert registry.usage(padding_id) == 1

    def test_signature_mismatch(self, registry):
        registry.register_atom(PADDING)
        compact = AtomicRegistry(SilkConfig(naming=NamingMode.COMPACT))
        with pytest.raises(ConfigError, match="named with"):
            compact.merge(registry.export())

    @pytest.mark.parametrize("data", [[], {"atoms": []}, {"atoms": [1], "usage": [], "rules": []}])
    def test_malformed_export(self, registry, data):
        with pytest.raises(ConfigError):
            registry.import_data(data)

    def test_rule_for_unknown_atom(self, registry):
        with pytest.raises(ConfigError, match="unknown atom"):
            registry.merge({"atoms": [], "usage": [], "rules": [["x", ".x{color:red}"]]})


class TestReset:
    def test_reset_clears_everything(self, registry):
        registry.register_atoms([PADDING, COLOR])
        registry.reset()
        assert len(registry) == 0
        assert registry.generate_css() == ""
        assert registry.get_stats().total_usage == 0
        assert "atoms=0" in repr(registry)
