"""
Тесты для CorrectnessOracle

Проверяет:
1. Округление эталона HALF_UP до значащих цифр
2. Сверку через точное сравнение (хвостовые нули не важны)
3. MismatchError с expected/actual
4. Границы точности эталона
"""

import pytest

from src.core.arith import FormatError, InvalidPrecision, MismatchError
from src.verification import PI_REFERENCE, CorrectnessOracle


@pytest.fixture
def oracle():
    """Oracle с эталонным π."""
    return CorrectnessOracle()


class TestReference:
    """Тесты эталонной константы."""

    def test_reference_digits(self, oracle) -> None:
        """Эталон содержит 286 значащих цифр (не меньше 180)."""
        assert len(PI_REFERENCE.replace(".", "")) == 286
        assert oracle.max_precision == 286
        assert PI_REFERENCE.startswith("3.14159265358979323846264338327950288419716939937510")
        assert PI_REFERENCE.endswith("326648213394")

    @pytest.mark.parametrize(
        "precision, expected",
        [
            (1, "3"),
            (2, "3.1"),
            (4, "3.142"),
            (9, "3.14159265"),
            (19, "3.141592653589793238"),
            (38, "3.1415926535897932384626433832795028842"),
        ],
    )
    def test_expected_rounded_half_up(self, oracle, precision, expected) -> None:
        assert oracle.expected(precision) == expected

    def test_expected_full_reference(self, oracle) -> None:
        assert oracle.expected(286) == PI_REFERENCE

    @pytest.mark.parametrize("precision", [0, -1, 287, 1000])
    def test_expected_precision_out_of_range(self, oracle, precision) -> None:
        with pytest.raises(InvalidPrecision):
            oracle.expected(precision)


class TestVerify:
    """Тесты сверки."""

    def test_match(self, oracle) -> None:
        assert oracle.verify("3.14159265", 9) is True
        assert oracle.matches("3.14159265", 9) is True

    def test_trailing_zeros_ignored(self, oracle) -> None:
        assert oracle.verify("3.141592650", 9) is True

    def test_mismatch_raises(self, oracle) -> None:
        with pytest.raises(MismatchError) as exc_info:
            oracle.verify("3.14159266", 9)

        error = exc_info.value
        assert error.expected == "3.14159265"
        assert error.actual == "3.14159266"
        assert error.precision == 9
        assert "3.14159265" in str(error)

    def test_mismatch_is_assertion_error(self, oracle) -> None:
        with pytest.raises(AssertionError):
            oracle.verify("3.1416", 9)

    def test_matches_does_not_raise_on_mismatch(self, oracle) -> None:
        assert oracle.matches("3.14159266", 9) is False

    def test_truncated_value_rejected(self, oracle) -> None:
        """Усечение вместо округления HALF_UP не проходит сверку."""
        assert oracle.matches("3.1415926535897932384626433832795028841", 38) is False
        assert oracle.matches("3.1415926535897932384626433832795028842", 38) is True

    def test_malformed_computed(self, oracle) -> None:
        with pytest.raises(FormatError):
            oracle.verify("3,14", 3)

        # matches не скрывает ошибки формата
        with pytest.raises(FormatError):
            oracle.matches("pi", 3)

    def test_custom_reference(self) -> None:
        oracle = CorrectnessOracle(reference="2.718281828459045")
        assert oracle.expected(5) == "2.7183"
        assert oracle.verify("2.7183", 5)
