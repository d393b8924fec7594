#------------------------------------------------------------------------------------------------------------------------------------
# Pachetele BITS au campuri de lungimi nealiniate la byte:
# - versiune si tip pe 3 biti
# - bit de "length type", lungime pe 15 biti sau numar de sub-pachete pe 11 biti
# - grupuri de literal pe 5 biti
#
# BitWriter-ul scrie secvente de biti de lungime arbitrara intr-un bytearray.
#------------------------------------------------------------------------------------------------------------------------------------
# IMPORTANT:

# In aceasta implementare: MSB first!
# Adica: ex: cifra 6 e scrisa pe biti ca 1 1 0 (cel mai semnificativ bit e cel din stanga - aici: 1).
#------------------------------------------------------------------------------------------------------------------------------------


class BitWriter:
    # clasa care se ocupa cu scriere bit cu bit intr-un bytearray

    __slots__ = ("_buf", "_cur", "_nbits")

    def __init__(self):
        self._buf = bytearray() # bytes-ii finalizati complet (8 biti)
        self._cur = 0           # byte-ul curent partial completat
        self._nbits = 0         # numarul de biti scrisi in _cur (0 -> 7)

    def bit_length(self) -> int: # numarul de biti scrisi pana acum
        return len(self._buf) * 8 + self._nbits

    def byte_length(self) -> int: # cati bytes ar avea iesirea daca as inchide fluxul acum
        return len(self._buf) + (1 if self._nbits else 0)

    def write_bit(self, bit: int) -> None: # scrie un singur bit (0 sau 1)
        self._cur = (self._cur << 1) | (bit & 1)
        self._nbits += 1
        if self._nbits == 8: # byte complet -> il mut in buffer
            self._buf.append(self._cur & 0xFF)
            self._cur = 0
            self._nbits = 0

    def write_bits(self, x: int, n: int) -> None: # scrie exact n biti din x, MSB-first
        if n < 0:
            raise ValueError(f"Numarul de biti doriti a fi scrisi trebuie sa fie >= 0. Am primit: n={n} !")
        if n == 0:
            return
        if x < 0:
            raise ValueError(f"x trebuie sa fie pozitiv. Am primit: x={x} !")
        if x.bit_length() > n:
            # campurile BITS au latime fixa, o valoare prea mare ar corupe pachetul
            raise ValueError(f"{x} nu incape pe {n} biti !")

        for i in range(n - 1, -1, -1):
            self.write_bit((x >> i) & 1)

    def extend(self, other: "BitWriter") -> None: # adauga toti bitii scrisi intr-un alt writer
        for byte in other._buf:
            self.write_bits(byte, 8)
        self.write_bits(other._cur, other._nbits)

    def to_bytes(self) -> bytes: # bytes-ii scrisi, ultimul byte completat cu zerouri la dreapta
        if not self._nbits:
            return bytes(self._buf)
        last = (self._cur << (8 - self._nbits)) & 0xFF
        return bytes(self._buf) + bytes([last])

    def to_hex(self) -> str: # ex: 110100101111111000101 -> "D2FE28"
        return self.to_bytes().hex().upper()
