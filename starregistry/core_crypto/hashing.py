"""
Hash Functions (From Scratch)

Implements the two digests used by the star registry:

- SHA-256 (FIPS 180-4): block identity, message digests, checksums
- RIPEMD-160: second half of the Bitcoin ``hash160`` used for addresses

Both are Merkle-Damgard constructions over 512-bit chunks and share the
padding routine; SHA-256 works on big-endian words, RIPEMD-160 on
little-endian words.
"""

from typing import List


# ============================================================================
# Constants
# ============================================================================

MASK_32 = 0xFFFFFFFF

# SHA-256 initial state: fractional parts of square roots of first 8 primes
SHA256_H = [
    0x6a09e667, 0xbb67ae85, 0x3c6ef372, 0xa54ff53a,
    0x510e527f, 0x9b05688c, 0x1f83d9ab, 0x5be0cd19
]

# SHA-256 round constants: fractional parts of cube roots of first 64 primes
SHA256_K = [
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5,
    0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3,
    0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc,
    0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7,
    0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13,
    0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3,
    0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5,
    0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208,
    0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2
]

RIPEMD160_H = [0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0]

# Per-round additive constants for the left and right lines
RIPEMD160_KL = [0x00000000, 0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xA953FD4E]
RIPEMD160_KR = [0x50A28BE6, 0x5C4DD124, 0x6D703EF3, 0x7A6D76E9, 0x00000000]

# Message word selection
RIPEMD160_RL = [
    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15,
    7, 4, 13, 1, 10, 6, 15, 3, 12, 0, 9, 5, 2, 14, 11, 8,
    3, 10, 14, 4, 9, 15, 8, 1, 2, 7, 0, 6, 13, 11, 5, 12,
    1, 9, 11, 10, 0, 8, 12, 4, 13, 3, 7, 15, 14, 5, 6, 2,
    4, 0, 5, 9, 7, 12, 2, 10, 14, 1, 3, 8, 11, 6, 15, 13,
]
RIPEMD160_RR = [
    5, 14, 7, 0, 9, 2, 11, 4, 13, 6, 15, 8, 1, 10, 3, 12,
    6, 11, 3, 7, 0, 13, 5, 10, 14, 15, 8, 12, 4, 9, 1, 2,
    15, 5, 1, 3, 7, 14, 6, 9, 11, 8, 12, 2, 10, 0, 4, 13,
    8, 6, 4, 1, 3, 11, 15, 0, 5, 12, 2, 13, 9, 7, 10, 14,
    12, 15, 10, 4, 1, 5, 8, 7, 6, 2, 13, 14, 0, 3, 9, 11,
]

# Rotation amounts
RIPEMD160_SL = [
    11, 14, 15, 12, 5, 8, 7, 9, 11, 13, 14, 15, 6, 7, 9, 8,
    7, 6, 8, 13, 11, 9, 7, 15, 7, 12, 15, 9, 11, 7, 13, 12,
    11, 13, 6, 7, 14, 9, 13, 15, 14, 8, 13, 6, 5, 12, 7, 5,
    11, 12, 14, 15, 14, 15, 9, 8, 9, 14, 5, 6, 8, 6, 5, 12,
    9, 15, 5, 11, 6, 8, 13, 12, 5, 12, 13, 14, 11, 8, 5, 6,
]
RIPEMD160_SR = [
    8, 9, 9, 11, 13, 15, 15, 5, 7, 7, 8, 11, 14, 14, 12, 6,
    9, 13, 15, 7, 12, 8, 9, 11, 7, 7, 12, 7, 6, 15, 13, 11,
    9, 7, 15, 11, 8, 6, 6, 14, 12, 13, 5, 14, 13, 13, 7, 5,
    15, 5, 8, 11, 14, 14, 6, 14, 6, 9, 12, 9, 12, 5, 15, 8,
    8, 5, 12, 9, 12, 5, 14, 6, 8, 13, 6, 5, 15, 13, 11, 11,
]


# ============================================================================
# Shared Helpers
# ============================================================================

def _right_rotate(value: int, amount: int) -> int:
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def _left_rotate(value: int, amount: int) -> int:
    return ((value << amount) | (value >> (32 - amount))) & MASK_32


def _pad_message(data: bytes, byteorder: str) -> bytes:
    """
    Pad a message to a multiple of 64 bytes.

    Appends 0x80, zeros up to 56 mod 64, then the bit length as a
    64-bit integer in the given byte order.
    """
    bit_length = len(data) * 8
    data += b'\x80'
    data += b'\x00' * ((56 - len(data) % 64) % 64)
    data += bit_length.to_bytes(8, byteorder=byteorder)
    return data


def _chunk_words(chunk: bytes, byteorder: str) -> List[int]:
    """Split a 64-byte chunk into 16 32-bit words."""
    return [
        int.from_bytes(chunk[i:i + 4], byteorder=byteorder)
        for i in range(0, 64, 4)
    ]


# ============================================================================
# SHA-256
# ============================================================================

def _sha256_schedule(words: List[int]) -> List[int]:
    """Expand 16 words into the 64-word message schedule."""
    w = words.copy()
    for i in range(16, 64):
        x = w[i - 15]
        y = w[i - 2]
        s0 = _right_rotate(x, 7) ^ _right_rotate(x, 18) ^ (x >> 3)
        s1 = _right_rotate(y, 17) ^ _right_rotate(y, 19) ^ (y >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & MASK_32)
    return w


def _sha256_compress(state: List[int], w: List[int]) -> List[int]:
    a, b, c, d, e, f, g, h = state

    for i in range(64):
        big_s1 = _right_rotate(e, 6) ^ _right_rotate(e, 11) ^ _right_rotate(e, 25)
        ch = (e & f) ^ (~e & g & MASK_32)
        t1 = (h + big_s1 + ch + SHA256_K[i] + w[i]) & MASK_32

        big_s0 = _right_rotate(a, 2) ^ _right_rotate(a, 13) ^ _right_rotate(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        t2 = (big_s0 + maj) & MASK_32

        h, g, f, e = g, f, e, (d + t1) & MASK_32
        d, c, b, a = c, b, a, (t1 + t2) & MASK_32

    return [(s + v) & MASK_32 for s, v in zip(state, (a, b, c, d, e, f, g, h))]


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 digest of ``data``.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    padded = _pad_message(data, 'big')
    state = SHA256_H.copy()

    for i in range(0, len(padded), 64):
        words = _chunk_words(padded[i:i + 64], 'big')
        state = _sha256_compress(state, _sha256_schedule(words))

    return b''.join(word.to_bytes(4, byteorder='big') for word in state)


def sha256_hex(data: bytes) -> str:
    """SHA-256 digest as a 64-character lowercase hex string."""
    return sha256(data).hex()


def sha256d(data: bytes) -> bytes:
    """Double SHA-256, as used by Bitcoin for message digests."""
    return sha256(sha256(data))


# ============================================================================
# RIPEMD-160
# ============================================================================

def _ripemd_f(round_index: int, x: int, y: int, z: int) -> int:
    """Boolean function for one of the five 16-step rounds."""
    if round_index == 0:
        return x ^ y ^ z
    if round_index == 1:
        return (x & y) | (~x & z & MASK_32)
    if round_index == 2:
        return (x | (~y & MASK_32)) ^ z
    if round_index == 3:
        return (x & z) | (y & ~z & MASK_32)
    return x ^ (y | (~z & MASK_32))


def _ripemd160_compress(state: List[int], x: List[int]) -> List[int]:
    """
    Run the two parallel lines over one chunk and combine them.

    The right line applies the boolean functions in reverse round order.
    """
    al, bl, cl, dl, el = state
    ar, br, cr, dr, er = state

    for j in range(80):
        rnd = j // 16

        t = (al + _ripemd_f(rnd, bl, cl, dl) + x[RIPEMD160_RL[j]]
             + RIPEMD160_KL[rnd]) & MASK_32
        t = (_left_rotate(t, RIPEMD160_SL[j]) + el) & MASK_32
        al, el, dl, cl, bl = el, dl, _left_rotate(cl, 10), bl, t

        t = (ar + _ripemd_f(4 - rnd, br, cr, dr) + x[RIPEMD160_RR[j]]
             + RIPEMD160_KR[rnd]) & MASK_32
        t = (_left_rotate(t, RIPEMD160_SR[j]) + er) & MASK_32
        ar, er, dr, cr, br = er, dr, _left_rotate(cr, 10), br, t

    return [
        (state[1] + cl + dr) & MASK_32,
        (state[2] + dl + er) & MASK_32,
        (state[3] + el + ar) & MASK_32,
        (state[4] + al + br) & MASK_32,
        (state[0] + bl + cr) & MASK_32,
    ]


def ripemd160(data: bytes) -> bytes:
    """
    Compute the RIPEMD-160 digest of ``data``.

    Example:
        >>> ripemd160(b"abc").hex()
        '8eb208f7e05d987a9b044a8e98c6b087f15a0bfc'
    """
    padded = _pad_message(data, 'little')
    state = RIPEMD160_H.copy()

    for i in range(0, len(padded), 64):
        state = _ripemd160_compress(state, _chunk_words(padded[i:i + 64], 'little'))

    return b''.join(word.to_bytes(4, byteorder='little') for word in state)


def hash160(data: bytes) -> bytes:
    """RIPEMD-160 of SHA-256, the digest behind P2PKH addresses."""
    return ripemd160(sha256(data))
