"""Tests for adapter resolution."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from recordsift import adapters
from recordsift.adapters import build_registry, from_class
from recordsift.adapters.base.adapter import RecordAdapter
from recordsift.adapters.base.registry import AdapterNotFoundError, AdapterRegistry
from recordsift.adapters.default.adapter import DefaultAdapter
from recordsift.adapters.sqlalchemy.adapter import SQLAlchemyAdapter
from recordsift.config.settings import RecordsSettings


class Base(DeclarativeBase):
    pass


class Page(Base):
    __tablename__ = "pages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class Note:
    pass


class NoteAdapter(RecordAdapter):
    @property
    def name(self) -> str:
        return "notes"

    def handles(self, klass: type) -> bool:
        return klass is Note

    def records(self, collection):  # type: ignore[no-untyped-def]
        return []


# ── AdapterRegistry ──────────────────────────────────────────────────────────


class TestAdapterRegistry:
    def test_register_and_get(self) -> None:
        registry = AdapterRegistry()
        adapter = NoteAdapter()
        registry.register(adapter)
        assert registry.get("notes") is adapter
        assert registry.registered_adapters == ["notes"]

    def test_get_unknown_raises(self) -> None:
        with pytest.raises(AdapterNotFoundError, match="Available adapters"):
            AdapterRegistry().get("mongo")

    def test_get_default_by_name(self) -> None:
        default = DefaultAdapter()
        assert AdapterRegistry(default=default).get("default") is default

    def test_overwrite_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = AdapterRegistry()
        registry.register(NoteAdapter())
        with caplog.at_level(logging.WARNING):
            registry.register(NoteAdapter())
        assert "Overwriting existing adapter registration: notes" in caplog.text

    def test_from_class_picks_handling_adapter(self) -> None:
        registry = AdapterRegistry(default=DefaultAdapter())
        adapter = NoteAdapter()
        registry.register(adapter)
        assert registry.from_class(Note) is adapter

    def test_from_class_falls_back_to_default(self) -> None:
        default = DefaultAdapter()
        registry = AdapterRegistry(default=default)
        registry.register(NoteAdapter())
        assert registry.from_class(dict) is default

    def test_from_class_first_registered_wins(self) -> None:
        class OtherNoteAdapter(NoteAdapter):
            @property
            def name(self) -> str:
                return "other-notes"

        registry = AdapterRegistry()
        first = NoteAdapter()
        registry.register(first)
        registry.register(OtherNoteAdapter())
        assert registry.from_class(Note) is first

    def test_from_class_without_default_raises(self) -> None:
        with pytest.raises(AdapterNotFoundError):
            AdapterRegistry().from_class(Note)

    def test_set_default(self) -> None:
        registry = AdapterRegistry()
        adapter = NoteAdapter()
        registry.set_default(adapter)
        assert registry.default is adapter
        assert registry.from_class(dict) is adapter


# ── Built-in registry ────────────────────────────────────────────────────────


class TestBuiltinRegistry:
    def test_mapped_class_uses_sqlalchemy(self) -> None:
        assert isinstance(from_class(Page), SQLAlchemyAdapter)

    def test_plain_class_uses_default(self) -> None:
        assert isinstance(from_class(Note), DefaultAdapter)

    def test_build_registry_defaults(self) -> None:
        registry = build_registry()
        assert registry.registered_adapters == ["sqlalchemy"]
        assert isinstance(registry.default, DefaultAdapter)

    def test_build_registry_default_adapter_setting(self) -> None:
        registry = build_registry(RecordsSettings(default_adapter="sqlalchemy"))
        assert isinstance(registry.default, SQLAlchemyAdapter)

    def test_build_registry_unknown_default_raises(self) -> None:
        with pytest.raises(AdapterNotFoundError):
            build_registry(RecordsSettings(default_adapter="mongoid"))

    def test_from_class_uses_module_registry(self, monkeypatch: pytest.MonkeyPatch) -> None:
        registry = AdapterRegistry(default=DefaultAdapter())
        adapter = NoteAdapter()
        registry.register(adapter)
        monkeypatch.setattr(adapters, "registry", registry)
        assert from_class(Note) is adapter
