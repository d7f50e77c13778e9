#!/usr/bin/env python
# -*- coding: utf-8 -*-

from pybitint.base import (
    calc_num_bits, int_to_bits, bits_to_int, zero_extend, truncate,
    ripple_add, twos_complement, wrapping_add, wrapping_sub,
    arith_shift_right, compare_bits,
)
from pybitint.bitint import BitInteger, BitOverflowError, InvalidArgumentError, DEFAULT_NUM_NATIVE_BITS
