import pytest

from livecode_engine.runtime import EngineSettings
from livecode_engine.sandbox import RunStatus, Sandbox
from livecode_engine.templates import BUILTIN_TEMPLATES, DEFAULT_TEMPLATE, Template, TemplateLibrary


def test_library_lists_builtin_templates_in_order() -> None:
    library = TemplateLibrary()

    assert library.names() == tuple(template.name for template in BUILTIN_TEMPLATES)
    assert DEFAULT_TEMPLATE in library
    assert len(library) == len(BUILTIN_TEMPLATES)


def test_unknown_template_raises_key_error() -> None:
    with pytest.raises(KeyError):
        TemplateLibrary().source("nope")


def test_add_rejects_duplicates_unless_replacing() -> None:
    library = TemplateLibrary([])
    library.add(Template("a", "1"))

    with pytest.raises(ValueError):
        library.add(Template("a", "2"))

    library.add(Template("a", "2"), replace=True)
    assert library.source("a") == "2"


def test_builtin_templates_execute_as_documented() -> None:
    sandbox = Sandbox(settings=EngineSettings(timeout_ms=2000))
    statuses = {
        template.name: sandbox.run(template.source).status for template in TemplateLibrary()
    }

    assert statuses == {
        "hello": RunStatus.SUCCESS,
        "console": RunStatus.SUCCESS,
        "functions": RunStatus.SUCCESS,
        "error": RunStatus.ERROR,
    }
