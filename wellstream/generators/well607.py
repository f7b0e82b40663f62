"""
wellstream.generators.well607

WELL607a: Well Equidistributed Long-period Linear generator with a
607-bit state (Panneton, L'Ecuyer, Matsumoto 2006). Period 2^607 - 1.

Parameters: w=32, r=19, p=1, m1=16, m2=15, m3=14
    T0 = M3(19)   T1 = M3(11)   T2 = M3(-14)  T3 = M1
    T4 = M3(18)   T5 = M1       T6 = M0       T7 = M3(-5)

Stream spacing Z = 2^400, substream spacing W = 2^250.
"""

from wellstream.core.types import MASK32
from .base import GeneratorCore, GeneratorFamily
from .jump import JumpTable

R = 19
P = 1
MASKU = MASK32 >> (32 - P)
MASKL = ~MASKU & MASK32
M1 = 16
M2 = 15
M3 = 14
R1 = R - 1
R2 = R - 2

BUFFER_SIZE = 32  # power of two >= R so the cursor wraps with a mask
MASK_STATE = BUFFER_SIZE - 1

# Characteristic polynomial P(z) of the recurrence, bit k of word j is the
# coefficient of z^(32j + k). The jump tables are powers of z reduced mod P.
CHAR_POLY = (
    0x987B2631, 0x2E33283D, 0x6A398474, 0xE9D24DA1, 0x31235359, 0x6A2BAF48, 0x7F97EFD4,
    0x468280F4, 0x7D9D9424, 0xA3238F8E, 0xE3EDB4EF, 0x0E0A25F7, 0x92C4DFF5, 0x55D0B8DA,
    0x7B982DEC, 0xA06C078F, 0x38B65C31, 0xC8C3788D, 0x8000B200,
)

DEFAULT_PACKAGE_SEED = (
    0xD6AFB71C, 0x82ADB18E, 0x326E714E, 0xB1EE42B6, 0xF1A834ED,
    0x04AE5721, 0xC5EA2843, 0xFA04116B, 0x6ACE14EF, 0xCD5781A0,
    0x6B1F731C, 0x7E3B8E3D, 0x8B34DE2A, 0x74EC15F5, 0x84EBC216,
    0x83EA2C61, 0xE4A83B1E, 0xA5D82CB9, 0x9E1A6C89,
)

# (z^(2^250) mod P(z)) mod 2
SUBSTREAM_JUMP = JumpTable(
    name="substream",
    exponent=250,
    words=(
        0x83167621, 0x6B5515C8, 0x61A62BD2, 0xBCEAA78F, 0xAC04B304,
        0x28A75EA4, 0xA9104058, 0x595EA53B, 0x35687E95, 0x7F8ECA9B,
        0x30BEFFB8, 0xC61E6111, 0x284EE30E, 0x4E9CD901, 0x659633BA,
        0x344CC69E, 0xD6052AC1, 0x5D508B69, 0x062CF130,
    ),
)

# (z^(2^400) mod P(z)) mod 2
STREAM_JUMP = JumpTable(
    name="stream",
    exponent=400,
    words=(
        0x70B2BDEE, 0x595828F1, 0x85A17885, 0x5100C7B2, 0xD3333DA2,
        0xB42857DE, 0xF8A7A4A7, 0xABAD2A33, 0x0A2580CF, 0xF94C465E,
        0x7DF951D5, 0x35467053, 0x0B3C9A4E, 0x06A33977, 0x0443910E,
        0xC25AEC3D, 0xEB72E8C5, 0x08873B01, 0x7DA57636,
    ),
)


def _m3(t: int, v: int) -> int:
    """M3(t): v ^ (v >> t) for t >= 0, v ^ (v << -t) for t < 0."""
    if t >= 0:
        return v ^ (v >> t)
    return (v ^ (v << -t)) & MASK32


class Well607Core(GeneratorCore):
    """WELL607a recurrence over a 32-word circular buffer.

    The window V0..V18 starts at the cursor. Each step writes newV1 over
    V0, moves the cursor back one slot and writes newV0 there, so the
    old V18 falls out of the window.
    """

    R = R
    BUFFER_SIZE = BUFFER_SIZE

    def get_state(self):
        s = self._state
        i = self._state_i
        return tuple(s[(i + k) & MASK_STATE] for k in range(R))

    def step_raw(self) -> int:
        s = self._state
        i = self._state_i

        z0 = (s[(i + R1) & MASK_STATE] & MASKL) | (s[(i + R2) & MASK_STATE] & MASKU)
        z1 = _m3(19, s[i]) ^ _m3(11, s[(i + M1) & MASK_STATE])
        z2 = _m3(-14, s[(i + M2) & MASK_STATE]) ^ s[(i + M3) & MASK_STATE]
        new_v1 = z1 ^ z2
        new_v0 = _m3(18, z0) ^ z1 ^ _m3(-5, new_v1)

        s[i] = new_v1
        i = (i + MASK_STATE) & MASK_STATE
        s[i] = new_v0
        self._state_i = i
        return new_v0


WELL607 = GeneratorFamily(
    name="well607",
    display_name="WELL607",
    core_cls=Well607Core,
    substream_table=SUBSTREAM_JUMP,
    stream_table=STREAM_JUMP,
    default_seed=DEFAULT_PACKAGE_SEED,
    # 0x00000001 alone sits in the bit masked out by MASKL, so that seed
    # steps straight to the all-zero state
    forbidden_last_words=(0x80000000, 0x00000001),
)
