import logging

from webcomp.compiler.build import build_file, compile_file
from webcomp.compiler.exceptions import MetadataError, TemplateStructureError
from webcomp.compiler.info import ComponentInfo
from webcomp.compiler.messages import Messages

from builders import FAKE_RUNTIME, el, page


def page_with_component(user_code=None):
    definition = el("element", el("template", "Hi"), name="x-hi")
    info = page(definition, el("x-hi"))
    component = ComponentInfo(
        tag_name="x-hi",
        constructor="Hi",
        output_filename="x_hi.py",
        element=definition,
        user_code=user_code,
        declaring_file=info,
    )
    info.declared_components.append(component)
    return info


def test_compile_file_units():
    sources = compile_file(page_with_component(), FAKE_RUNTIME)
    assert sorted(sources) == ["index", "x_hi"]
    assert "class Hi(autogenerated.WebComponent):" in sources["x_hi"]
    assert "class MainPage(autogenerated.Page):" in sources["index"]


def test_library_file_has_no_page():
    info = page_with_component()
    info.is_page = False
    assert list(compile_file(info)) == ["x_hi"]


def test_build_file_writes_modules(tmp_path):
    summary = build_file(page_with_component(), tmp_path / "out")
    assert summary.pages == 1
    assert summary.components == 1
    assert summary.errors == 0
    assert sorted(p.name for p in summary.outputs) == ["index.py", "x_hi.py"]
    assert (tmp_path / "out" / "index.py").read_text().startswith("# Generated from index.html.")


def test_build_file_counts_errors(tmp_path, caplog):
    messages = Messages()
    with caplog.at_level(logging.ERROR):
        summary = build_file(page_with_component("class Wrong:\n    pass\n"), tmp_path, messages=messages)
    assert summary.errors == 1
    assert messages.has_errors
    assert "please provide a class definition for Hi" in caplog.text
    # The user's code is still written out unchanged
    assert (tmp_path / "x_hi.py").read_text() == "class Wrong:\n    pass\n"


def test_messages():
    messages = Messages()
    messages.warning("unused binding", filename="a.html")
    messages.info("compiled")
    assert not messages.has_errors
    assert str(messages.messages[0]) == "a.html: warning: unused binding"
    assert str(messages.messages[1]) == "info: compiled"
    messages.clear()
    assert messages.messages == []


def test_error_formatting():
    assert str(MetadataError("bad", file_path="a.json", line=3)) == "a.json:3: bad"
    assert str(MetadataError("bad", file_path="a.json")) == "a.json: bad"
    assert str(TemplateStructureError("bad")) == "bad"
