"""Tests for the InjectionConfig Builder."""

import logging

import pytest

from tablegen import injection
from tablegen.errors import InvalidConfigError
from tablegen.injection import Builder, InjectionConfig


def _noop(table, context):
    pass


class TestValidation:
    def test_none_static_context_rejected(self):
        with pytest.raises(InvalidConfigError):
            Builder().with_static_context(None)

    def test_none_template_files_rejected(self):
        with pytest.raises(InvalidConfigError):
            Builder().with_template_files(None)

    def test_none_hook_rejected(self):
        with pytest.raises(InvalidConfigError):
            Builder().with_output_hook(None)

    def test_non_callable_hook_rejected(self):
        with pytest.raises(InvalidConfigError, match="callable"):
            Builder().with_output_hook("not a function")

    def test_invalid_config_error_is_value_error(self):
        assert issubclass(InvalidConfigError, ValueError)

    def test_failed_call_leaves_previous_value(self):
        builder = Builder().with_static_context({"author": "alice"})
        with pytest.raises(InvalidConfigError):
            builder.with_static_context(None)
        assert builder.build().static_context == {"author": "alice"}


class TestReplacement:
    def test_static_context_replaced_not_merged(self):
        config = (
            Builder()
            .with_static_context({"author": "alice"})
            .with_static_context({"date": "2024-01-01"})
            .build()
        )
        assert config.static_context == {"date": "2024-01-01"}

    def test_template_files_replaced_not_merged(self):
        config = (
            Builder()
            .with_template_files({"a": "a.j2"})
            .with_template_files({"b": "b.j2"})
            .build()
        )
        assert config.template_files == {"b": "b.j2"}

    def test_second_hook_replaces_first(self, user_table):
        def first(table, context):
            context["first"] = True

        def second(table, context):
            context["second"] = True

        config = Builder().with_output_hook(first).with_output_hook(second).build()
        context = {}
        config.merge(user_table, context)

        assert config.output_hook is second
        assert context == {"second": True}

    def test_callable_object_hook(self, user_table):
        class Stamp:
            def __call__(self, table, context):
                context["stamped"] = table.entity_name

        config = Builder().with_output_hook(Stamp()).build()
        context = {}
        config.merge(user_table, context)
        assert context == {"stamped": "User"}


class TestOverride:
    def test_default_disabled(self):
        assert Builder().build().override_enabled is False

    def test_enable_override(self):
        assert Builder().enable_override().build().override_enabled is True

    def test_enable_override_idempotent(self):
        config = Builder().enable_override().enable_override().build()
        assert config.override_enabled is True

    def test_deprecated_alias_enables_override(self, monkeypatch):
        monkeypatch.setattr(injection, "_file_override_warned", False)
        assert Builder().file_override().build().override_enabled is True

    def test_deprecated_alias_warns_once(self, monkeypatch, caplog):
        monkeypatch.setattr(injection, "_file_override_warned", False)
        with caplog.at_level(logging.WARNING, logger="tablegen.injection"):
            Builder().file_override()
            Builder().file_override().file_override()

        warnings = [r for r in caplog.records if "deprecated" in r.getMessage()]
        assert len(warnings) == 1
        assert "enable_override" in warnings[0].getMessage()


class TestBuild:
    def test_build_returns_same_instance(self):
        builder = Builder().with_static_context({"author": "alice"})
        assert builder.build() is builder.build()

    def test_builder_classmethod(self):
        config = InjectionConfig.builder().with_output_hook(_noop).build()
        assert isinstance(config, InjectionConfig)
        assert config.output_hook is _noop

    def test_fluent_chain_returns_builder(self):
        builder = Builder()
        assert builder.with_static_context({}) is builder
        assert builder.with_template_files({}) is builder
        assert builder.with_output_hook(_noop) is builder
        assert builder.enable_override() is builder
