import shutil

import pytest

from xsd_to_go.pipeline import FormatterConfig, PipelineGenerator
from xsd_to_go.pipeline.formatters import GofmtFormatter

CODE = "package main\n\ntype a struct {\nB   int `xml:\"b,attr\"`\n}\n"


def test_missing_gofmt_leaves_code_unchanged(caplog):
    formatter = GofmtFormatter(executable="definitely-not-gofmt")
    assert not formatter.is_available()
    assert formatter.format(CODE, FormatterConfig(enabled=True)) == CODE
    assert "definitely-not-gofmt not found" in caplog.text


def test_generator_without_gofmt(monkeypatch):
    monkeypatch.setattr(GofmtFormatter, "is_available", lambda self: False)
    config = FormatterConfig(enabled=True)
    codegen = PipelineGenerator.from_strings(['<schema><element name="a"><complexType/></element></schema>'], formatter_config=config)
    assert "type a struct {\n}\n" in codegen.generate()


@pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not installed")
def test_gofmt_aligns_fields():
    formatted = GofmtFormatter().format(CODE, FormatterConfig(enabled=True))
    assert "\tB int `xml:\"b,attr\"`\n" in formatted
