from pathlib import Path

import pytest

from core.domain.errors import ValidationError
from core.services.collector import CollectorHooks, collect_parameters


class ScriptedPrompt:
    """Devuelve respuestas en orden y registra qué se preguntó."""

    def __init__(self, answers: list[str]) -> None:
        self.answers = list(answers)
        self.asked: list[tuple[str, str | None]] = []

    def __call__(self, label: str, default: str | None) -> str:
        self.asked.append((label, default))
        answer = self.answers.pop(0)
        if answer == "" and default is not None:
            return default
        return answer


def test_collects_valid_parameters(tmp_path: Path) -> None:
    image = tmp_path / "logo.png"
    image.write_bytes(b"png")
    prompt = ScriptedPrompt(["Test", "TST", "1000000", "500000", "6", str(image)])

    params = collect_parameters(CollectorHooks(prompt=prompt))

    assert params.name == "Test"
    assert params.symbol == "TST"
    assert params.total_supply == 1_000_000
    assert params.premint_amount == 500_000
    assert params.decimals == 6
    assert params.image_path == image


def test_decimals_default_to_nine_and_image_is_optional() -> None:
    prompt = ScriptedPrompt(["Test", "TST", "100", "10", "", ""])
    params = collect_parameters(CollectorHooks(prompt=prompt))
    assert params.decimals == 9
    assert params.image_path is None
    assert ("Decimals", "9") in prompt.asked


def test_invalid_fields_are_asked_again() -> None:
    warnings: list[str] = []
    prompt = ScriptedPrompt(
        [
            "  ", "Test",          # nombre vacío
            "", "TST",             # símbolo vacío
            "abc", "0", "1000000",  # supply no numérico y <= 0
            "1200000", "500000",   # pre-mint > supply
            "-1", "6",             # decimales negativos
            "",
        ]
    )

    params = collect_parameters(CollectorHooks(prompt=prompt, warning=warnings.append))

    assert params.premint_amount == 500_000
    assert params.decimals == 6
    assert len(warnings) == 6
    assert any("cannot exceed total supply" in w for w in warnings)


def test_nonexistent_image_is_rejected_at_collection(tmp_path: Path) -> None:
    prompt = ScriptedPrompt(["Test", "TST", "100", "10", "6", str(tmp_path / "missing.png")])
    hooks = CollectorHooks(prompt=prompt, max_attempts=1)

    with pytest.raises(ValidationError) as exc:
        collect_parameters(hooks)

    assert exc.value.field == "image_path"
