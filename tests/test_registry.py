"""Tests for the generator registry."""

import pytest

from db2entity.codegen import GeneratorConfig, get_generator
from db2entity.codegen.core.generator import CodeGenerator
from db2entity.codegen.languages.java import JavaGenerator
from db2entity.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_registry,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
    register_generator,
)


class KotlinStub(JavaGenerator):
    """Generator subclass used to exercise registration."""

    @property
    def language_name(self):
        return "kotlin"

    @property
    def file_extension(self):
        return ".kt"


@pytest.fixture
def registry():
    registry = GeneratorRegistry()
    registry.register("java", JavaGenerator, aliases=["jpa"])
    return registry


class TestRegistry:
    """Registration and lookup."""

    def test_resolve_alias(self, registry):
        assert registry.resolve("JPA") == "java"
        assert registry.get_generator_class("jpa") is JavaGenerator

    def test_unknown_language(self, registry):
        with pytest.raises(RegistryError, match="cobol"):
            registry.resolve("cobol")

    def test_register_rejects_non_generators(self, registry):
        with pytest.raises(RegistryError):
            registry.register("text", str)

    def test_alias_conflict(self, registry):
        with pytest.raises(RegistryError, match="already points"):
            registry.register("kotlin", KotlinStub, aliases=["jpa"])

    def test_unregister_removes_aliases(self, registry):
        registry.unregister("java")

        assert not registry.is_supported("java")
        assert not registry.is_supported("jpa")

    def test_create_generator_config_types(self, registry, tmp_path):
        assert isinstance(registry.create_generator("java"), JavaGenerator)

        from_dict = registry.create_generator("java", {"package_name": "com.dict"})
        assert from_dict.config.package_name == "com.dict"

        config = GeneratorConfig(package_name="com.obj")
        assert registry.create_generator("java", config).config is config

        path = tmp_path / "c.json"
        path.write_text('{"package_name": "com.file"}')
        assert registry.create_generator("java", str(path)).config.package_name == "com.file"

    def test_create_generator_wraps_config_errors(self, registry, tmp_path):
        with pytest.raises(RegistryError, match="Failed to create"):
            registry.create_generator("java", tmp_path / "missing.json")

    def test_invalid_config_type(self, registry):
        with pytest.raises(RegistryError, match="Invalid config type"):
            registry.create_generator("java", 42)

    def test_language_info(self, registry):
        registry.register("kotlin", KotlinStub, aliases=["kt"])
        info = registry.get_language_info("kt")

        assert info["name"] == "kotlin"
        assert info["file_extension"] == ".kt"
        assert info["aliases"] == ["kt"]
        assert registry.list_languages() == ["java", "kotlin"]


class TestGlobalRegistry:
    """Built-in registrations."""

    def test_java_is_registered(self):
        assert "java" in list_supported_languages()
        assert is_language_supported("jpa")
        assert isinstance(get_generator("jpa"), JavaGenerator)

    def test_singleton(self):
        assert get_registry() is get_registry()

    def test_language_info(self):
        info = list_all_language_info()["java"]

        assert info["class"] == "JavaGenerator"
        assert info["file_extension"] == ".java"
        assert info["aliases"] == ["jpa"]

    def test_generators_are_code_generators(self):
        assert isinstance(get_generator("java"), CodeGenerator)

    def test_register_generator(self):
        register_generator("kotlin", KotlinStub, aliases=["kt"])
        try:
            assert "kotlin" in list_supported_languages()
            generator = get_generator("kt")
            assert isinstance(generator, KotlinStub)
            assert generator.file_extension == ".kt"
        finally:
            get_registry().unregister("kotlin")

        assert not is_language_supported("kt")
