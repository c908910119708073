import json

import pytest

from adapters.json_exporter import export_mint_record_json
from core.domain.errors import ExportError
from core.domain.models import MintRecord


def _record(**overrides) -> MintRecord:
    values = dict(
        name="Test",
        symbol="TST",
        total_supply=1_000_000,
        decimals=6,
        mint_address="Mint1111111111111111111111111111111111111",
        ata_address="Ata11111111111111111111111111111111111111",
        premint_amount=500_000,
    )
    values.update(overrides)
    return MintRecord(**values)


def test_export_uses_camel_case_fields(tmp_path) -> None:
    out = export_mint_record_json(record=_record(), output_path=tmp_path / "token-details.json")

    data = json.loads(out.read_text(encoding="utf-8"))
    assert list(data) == [
        "tokenName",
        "tokenSymbol",
        "totalSupply",
        "decimals",
        "mintAddress",
        "ataAddress",
        "preMintAmount",
        "tokenImageURL",
    ]
    assert data["preMintAmount"] == 500_000
    assert data["decimals"] == 6
    assert data["tokenImageURL"] == ""


def test_export_overwrites_previous_file(tmp_path) -> None:
    path = tmp_path / "token-details.json"
    path.write_text("old", encoding="utf-8")

    export_mint_record_json(
        record=_record(image_url="https://gateway.pinata.cloud/ipfs/QmHash"),
        output_path=path,
    )

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["tokenImageURL"] == "https://gateway.pinata.cloud/ipfs/QmHash"


def test_write_failure_raises_export_error(tmp_path) -> None:
    target = tmp_path / "is-a-directory"
    target.mkdir()
    with pytest.raises(ExportError) as exc:
        export_mint_record_json(record=_record(), output_path=target)
    assert isinstance(exc.value.__cause__, OSError)
