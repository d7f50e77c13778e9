#!/usr/bin/env python
# -*- coding: utf-8 -*-

import numpy as np

__all__ = [
    'calc_num_bits', 'int_to_bits', 'bits_to_int', 'zero_extend', 'truncate',
    'ripple_add', 'twos_complement', 'wrapping_add', 'wrapping_sub',
    'arith_shift_right', 'compare_bits',
]

'''
Stateless functions on bit vectors that are used throughout the BitInteger
class. A bit vector is a one-dimensional numpy array of booleans, with the
most-significant bit at index 0 and the ones place at the last index.
'''

def calc_num_bits(num):
    '''
    Number of bits used to store a non-negative integer, floor(log2(num)) + 2,
    i.e. enough bits to hold the value plus one leading guard bit. Zero is
    stored in a single bit.
    '''
    num = int(num)
    if num == 0:
        return 1
    return num.bit_length() + 1


def int_to_bits(num, num_bits):
    '''
    Decompose a non-negative integer into a bit vector of a certain width,
    starting with the ones place. Bits above the width are dropped.
    '''
    bits = np.zeros(num_bits, dtype=bool)
    for b in range(num_bits - 1, -1, -1):
        bits[b] = num % 2 == 1
        num >>= 1
    return bits


def bits_to_int(bits):
    '''
    Re-construct the unsigned integer value of a bit vector, starting with the
    most-significant bit. Unbounded, as with any Python int.
    '''
    num = 0
    for bit in bits:
        num = (num << 1) | int(bit)
    return num


def zero_extend(bits, num_bits):
    '''
    Pad a bit vector with leading zeros up to a certain width. Always returns a
    new array, even if no padding is needed.
    '''
    num_pad = num_bits - len(bits)
    if num_pad <= 0:
        return bits.copy()
    return np.concatenate((np.zeros(num_pad, dtype=bool), bits))


def truncate(bits, num_bits):
    '''
    Keep only the least-significant `num_bits` bits of a bit vector.
    '''
    if len(bits) <= num_bits:
        return bits.copy()
    return bits[len(bits) - num_bits:].copy()


def ripple_add(a, b):
    '''
    Ripple-carry sum of two equal-width bit vectors. Returns the sum at the same
    width and the carry out of the most-significant position.
    '''
    assert len(a) == len(b), f"Bit vectors of {len(a):,d} and {len(b):,d} bits"
    total = np.zeros(len(a), dtype=bool)
    carry = False
    for i in range(len(a) - 1, -1, -1):
        bit_a, bit_b = bool(a[i]), bool(b[i])
        total[i] = bit_a ^ bit_b ^ carry
        carry = (bit_a and bit_b) or (carry and (bit_a or bit_b))
    return total, carry


def twos_complement(bits):
    '''
    Negate a bit vector in two's complement, wrapping at its own width.
    '''
    one = int_to_bits(1, len(bits))
    negated, _ = ripple_add(np.logical_not(bits), one)
    return negated


def wrapping_add(a, b):
    return ripple_add(a, b)[0]


def wrapping_sub(a, b):
    return ripple_add(a, twos_complement(b))[0]


def arith_shift_right(bits, fill=None):
    '''
    Shift a bit vector right by one position. The vacated most-significant
    position is filled with `fill`, or with a copy of the sign bit if no fill
    is given. Returns the shifted vector and the bit shifted out.
    '''
    if fill is None:
        fill = bits[0]
    shifted = np.concatenate((np.array([fill], dtype=bool), bits[:-1]))
    return shifted, bool(bits[-1])


def compare_bits(a, b):
    '''
    Compare the unsigned values of two bit vectors of any widths, returning -1,
    0 or 1 like the old cmp() builtin.
    '''
    num_bits = max(len(a), len(b))
    a, b = zero_extend(a, num_bits), zero_extend(b, num_bits)
    (diff_idxs,) = np.nonzero(a != b)
    if len(diff_idxs) == 0:
        return 0
    return 1 if a[diff_idxs[0]] else -1
