"""入力ファイル読み込みのテスト"""
import json
import pytest
from pathlib import Path

from invoice_maker.main import load_input, project_root


def test_load_sample_input():
    """同梱のサンプル入力を読み込める"""
    data = load_input(str(project_root / "examples" / "sample_invoice.json"))

    assert data["items"]
    assert "client_name" in data


def test_load_input_rejects_non_object(tmp_path: Path):
    input_file = tmp_path / "invoice.json"
    input_file.write_text(json.dumps([1, 2]), encoding="utf-8")

    with pytest.raises(ValueError, match="入力ファイルの形式が不正です"):
        load_input(str(input_file))
