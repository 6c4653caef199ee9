import operator


def sign_extend(value: int, bits: int) -> int:
    """Widen a `bits`-bit two's-complement field to its 16-bit encoding.

    sign_extend(0b11111, 5) == 0xFFFF, sign_extend(0b01111, 5) == 0x000F
    """
    value &= (1 << bits) - 1
    if (value >> (bits - 1)) & 1:
        value |= (0xFFFF << bits) & 0xFFFF
    return value


class ALU:
    OPS = {
        "ADD": operator.add,
        "AND": operator.and_,
    }

    @classmethod
    def execute(cls, op: str, a: int, b: int) -> int:
        try:
            return cls.OPS[op](a, b) & 0xFFFF
        except KeyError as e:
            raise ValueError(f"Unsupported ALU op {op}") from e

    @staticmethod
    def complement(a: int) -> int:
        return ~a & 0xFFFF
