"""
CorrectnessOracle — сверка результата с эталонным π

Эталон хранится как фиксированная decimal-строка (286 значащих цифр) и
используется только для чтения. Перед сравнением эталон округляется HALF_UP
до запрошенного числа значащих цифр, затем сравнивается через
DecimalValue.compare (точно, без учёта хвостовых нулей).
"""

from typing import Final

from src.core.arith.context import ArithmeticContext, RoundingMode
from src.core.arith.decimal_value import DecimalValue
from src.core.arith.errors import InvalidPrecision, MismatchError

# =============================================================================
# ЭТАЛОН
# =============================================================================

PI_REFERENCE: Final[str] = (
    "3.14159265358979323846264338327950288419716939937510582097494459230"
    "78164062862089986280348253421170679821480865132823066470938446095505822317"
    "25359408128481117450284102701938521105559644622948954930381964428810975665"
    "933446128475648233786783165271201909145648566923460348610454326648213394"
)


# =============================================================================
# ORACLE
# =============================================================================


class CorrectnessOracle:
    """
    Сверка вычисленной строки с эталонной константой.

    Экземпляр иммутабелен: разбор эталона выполняется один раз.
    """

    def __init__(
        self,
        reference: str = PI_REFERENCE,
        rounding_mode: RoundingMode = RoundingMode.HALF_UP,
    ):
        self._reference_text = reference
        self._reference = DecimalValue.from_string(reference)
        self._rounding_mode = rounding_mode

    @property
    def reference(self) -> str:
        return self._reference_text

    @property
    def max_precision(self) -> int:
        """Количество значащих цифр эталона."""
        return self._reference.digits

    def expected_value(self, target_precision: int) -> DecimalValue:
        """
        Эталон, округлённый до target_precision значащих цифр.

        Raises:
            InvalidPrecision: target_precision <= 0 или больше цифр эталона
        """
        ctx = ArithmeticContext(precision=target_precision, rounding_mode=self._rounding_mode)
        if target_precision > self.max_precision:
            raise InvalidPrecision(
                target_precision,
                f"precision {target_precision} exceeds the {self.max_precision} "
                f"digits of the reference value",
            )
        return ctx.round(self._reference)

    def expected(self, target_precision: int) -> str:
        """Строковое представление expected_value."""
        return self.expected_value(target_precision).to_string()

    def verify(self, computed: str, target_precision: int) -> bool:
        """
        Сверка computed с эталоном на target_precision цифрах.

        Args:
            computed: Результат движка в формате DecimalValue.to_string
            target_precision: Количество значащих цифр

        Returns:
            True при совпадении

        Raises:
            MismatchError: Значения не совпали (содержит expected/actual)
            FormatError: computed не является decimal-литералом
            InvalidPrecision: Некорректная точность
        """
        expected = self.expected_value(target_precision)
        actual = DecimalValue.from_string(computed)

        if DecimalValue.compare(expected, actual) != 0:
            raise MismatchError(expected.to_string(), computed, target_precision)
        return True

    def matches(self, computed: str, target_precision: int) -> bool:
        """Сверка без exception при расхождении значений."""
        try:
            return self.verify(computed, target_precision)
        except MismatchError:
            return False
