from typing import Optional

# Cursor de citire bit cu bit peste un flux de bytes (MSB first)
# Pentru pachetele BITS fluxul vine din hex: fiecare cifra hex = 4 biti, deci
# lungimea in biti nu e mereu multiplu de 8 -> pastram explicit _bit_length
class BitReader:
    __slots__ = ("_data", "_bit_length", "_pos")

    def __init__(self, data: bytes, bit_length: Optional[int] = None):
        self._data = bytes(data)  # Sursa de date (bytes imutabili)

        max_bits = len(self._data) * 8
        if bit_length is None:
            bit_length = max_bits
        if bit_length < 0 or bit_length > max_bits:
            raise ValueError(f"bit_length invalid: {bit_length} (disponibili {max_bits} biti)")

        self._bit_length = bit_length  # Cati biti din _data sunt valizi
        self._pos = 0                  # Pozitia cursorului, in biti de la inceputul fluxului

    # Construieste fluxul dintr-un sir hex: "D2FE28" -> 1101 0010 1111 1110 0010 1000
    @classmethod
    def from_hex(cls, text: str) -> "BitReader":
        digits = len(text)
        # bytes.fromhex nu accepta lungime impara, completam cu o cifra 0 care nu va fi citibila
        padded = text + "0" if digits % 2 else text
        return cls(bytes.fromhex(padded), digits * 4)

    # Citeste un singur bit si returneaza 0 sau 1
    def read_bit(self) -> int:
        if self._pos >= self._bit_length:
            raise EOFError("S-a atins sfarsitul fluxului de date (End of Stream).")

        byte_pos, bit_pos = divmod(self._pos, 8)
        bit = (self._data[byte_pos] >> (7 - bit_pos)) & 1
        self._pos += 1
        return bit

    # Citeste n biti si ii returneaza ca un singur intreg
    def read_bits(self, n: int) -> int:
        if n < 0:
            raise ValueError(f"Numarul de biti de citit trebuie sa fie >= 0. Am primit: {n}")
        if n == 0:
            return 0
        if n > self.bits_remaining:
            raise EOFError(f"Nu sunt suficienti biti: ceruti {n}, disponibili {self.bits_remaining}")

        val = 0
        for _ in range(n):
            val = (val << 1) | self.read_bit()
        return val

    # Citeste un bit fara a avansa cursorul
    def peek_bit(self) -> int:
        if self._pos >= self._bit_length:
            raise EOFError("End of Stream")
        byte_pos, bit_pos = divmod(self._pos, 8)
        return (self._data[byte_pos] >> (7 - bit_pos)) & 1

    # Muta cursorul la un offset absolut (in biti)
    def seek(self, offset: int) -> None:
        if offset < 0 or offset > self._bit_length:
            raise ValueError(f"Offset invalid: {offset} (lungime flux: {self._bit_length} biti)")
        self._pos = offset

    @property
    # Pozitia curenta a cursorului, in biti
    def position(self) -> int:
        return self._pos

    @property
    # Numarul total de biti valizi din flux
    def bit_length(self) -> int:
        return self._bit_length

    @property
    # Returneaza cati biti mai sunt disponibili in flux
    def bits_remaining(self) -> int:
        return self._bit_length - self._pos
