from __future__ import annotations

import pytest
import yaml

from datarepo.ingest.errors import SchemaParseError
from datarepo.schema import SCHEMA_EDITOR_TUTORIAL_BLURB, SchemaField


def _schema() -> SchemaField:
    return SchemaField(
        name="images",
        type="record",
        fields=[
            SchemaField(name="id", type="int64"),
            SchemaField(name="score", type="float64", nullable=True),
            SchemaField(name="labelled", type="bool"),
            SchemaField(name="url", type="uri/http"),
            SchemaField(
                name="meta",
                type="record",
                fields=[SchemaField(name="source", type="uri/s3")],
            ),
        ],
    )


def test_schema_round_trips_through_yaml() -> None:
    schema = _schema()
    assert SchemaField.from_yaml(schema.to_yaml()) == schema


def test_schema_yaml_uses_plain_editable_keys() -> None:
    data = yaml.safe_load(_schema().to_yaml())

    assert list(data) == ["name", "type", "fields"]
    assert data["fields"][0] == {"name": "id", "type": "int64"}
    assert data["fields"][1] == {"name": "score", "type": "float64", "nullable": True}


def test_tutorial_blurb_is_ignored_when_parsing() -> None:
    schema = _schema()
    assert SchemaField.from_yaml(SCHEMA_EDITOR_TUTORIAL_BLURB + schema.to_yaml()) == schema


@pytest.mark.parametrize(
    "text",
    [
        "",
        "# only comments\n",
        "name: [unterminated",
        "- name: a\n  type: string\n",
        "name: a\ntype: decimal\n",
        "name: a\ntype: string\nfields:\n  - {name: b, type: string}\n",
        "name: r\ntype: record\nfields:\n  - {name: b, type: string}\n  - {name: b, type: int64}\n",
        "name: a\ntype: string\ncomment: extra\n",
    ],
)
def test_malformed_schema_text_raises_parse_error(text: str) -> None:
    with pytest.raises(SchemaParseError):
        SchemaField.from_yaml(text)
