#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging

import numpy as np

import pybitint.base as base


DEFAULT_NUM_NATIVE_BITS = 64


class InvalidArgumentError(ValueError):
    '''
    Raised for values that cannot be turned into a BitInteger, or used as
    an operand of one.
    '''


class BitOverflowError(OverflowError):
    '''
    Raised when a BitInteger does not fit into the requested native integer
    width.
    '''


class BitInteger():
    '''
    Variable-width unsigned integers, stored as an explicit vector of bits with the
    most-significant bit first. All of the arithmetic is carried out bit by bit, so
    the width of an instance grows as needed instead of over- or under-flowing.

    The named methods (and_, or_, xor, add, sub, mul, negate, invert) change the
    instance in place and return None. The operators (&, |, ^, +, -, *, unary -
    and ~) clone the left operand first and return a new instance, leaving both
    operands untouched.
    '''

    def __init__(self, num=0):
        '''
        Initialize the class with a value that can be converted to a non-negative
        integer with the top-level int() call, or with another BitInteger to copy.
        :param num: Integer value, or a BitInteger to clone. Defaults to 0, which
        is stored as a single zero bit.
        '''
        if isinstance(num, BitInteger):
            self.bits = num.bits.copy()
            return
        int_num = int(num)
        if int_num < 0:
            raise InvalidArgumentError(f"Value {int_num} is negative, cannot be stored unsigned")
        self.bits = base.int_to_bits(int_num, base.calc_num_bits(int_num))

    @classmethod
    def from_bits(cls, bits):
        '''
        Build an instance from a sequence of truthy / falsy values, most-significant
        bit first. Strings are rejected, use from_str() for those.
        '''
        if isinstance(bits, str):
            raise InvalidArgumentError(f"'{bits}' is a string, parse it with from_str()")
        bit_vec = np.array([bool(bit) for bit in bits], dtype=bool)
        if len(bit_vec) == 0:
            raise InvalidArgumentError("At least one bit is needed")
        obj = cls()
        obj.bits = bit_vec
        return obj

    @classmethod
    def from_str(cls, text):
        '''
        Parse the `0b...` display string produced by str().
        '''
        digits = text[2:] if text.startswith('0b') else ''
        if not digits or any(c not in '01' for c in digits):
            raise InvalidArgumentError(f"'{text}' is not a binary string like '0b0101'")
        return cls.from_bits(c == '1' for c in digits)

    @property
    def num_bits(self):
        return len(self.bits)

    def clone(self):
        return BitInteger(self)

    def _resize(self, num_bits):
        if num_bits >= self.num_bits:
            self.bits = base.zero_extend(self.bits, num_bits)
        else:
            self.bits = base.truncate(self.bits, num_bits)

    def _check_operand(self, u):
        if not isinstance(u, BitInteger):
            raise InvalidArgumentError(f"Operand {u!r} is not a BitInteger")
        return u

    def to_int(self, num_native_bits=DEFAULT_NUM_NATIVE_BITS):
        '''
        Unsigned integer value, folded from the most-significant bit.
        :param num_native_bits: Width of the native unsigned integer the value
        has to fit into. Defaults to 64.
        '''
        num = base.bits_to_int(self.bits)
        if num > (2 ** num_native_bits) - 1:
            raise BitOverflowError(f"Value {self} out-of-range for unsigned {num_native_bits:,d} bits")
        return num

    def to_signed_int(self, num_native_bits=DEFAULT_NUM_NATIVE_BITS):
        '''
        Signed integer value, reading the bits as two's complement at this
        instance's own width.
        :param num_native_bits: Width of the native signed integer the value
        has to fit into. Defaults to 64.
        '''
        if self.bits[0]:
            magnitude = self.clone()
            magnitude.negate()
            num = -base.bits_to_int(magnitude.bits)
        else:
            num = base.bits_to_int(self.bits)
        two_pow = 2 ** num_native_bits
        if num not in range(-two_pow // 2, two_pow // 2):
            raise BitOverflowError(f"Value {self} out-of-range for signed {num_native_bits:,d} bits")
        return num

    def __int__(self):
        return self.to_int()

    def __len__(self):
        return self.num_bits

    def __bool__(self):
        return bool(self.bits.any())

    def __str__(self):
        return '0b' + ''.join('1' if bit else '0' for bit in self.bits)

    def __repr__(self):
        return f"BitInteger('{self}')"

    def __format__(self, *fmt_args):
        '''
        Just use the underlying Python int()'s formatting.
        '''
        return base.bits_to_int(self.bits).__format__(*fmt_args)

    '''
    Comparisons are by unsigned value, so leading zeros do not matter.
    '''
    def __eq__(self, o):
        if not isinstance(o, BitInteger):
            return NotImplemented
        return base.compare_bits(self.bits, o.bits) == 0

    def __lt__(self, o):
        if not isinstance(o, BitInteger):
            return NotImplemented
        return base.compare_bits(self.bits, o.bits) < 0

    def __le__(self, o):
        if not isinstance(o, BitInteger):
            return NotImplemented
        return base.compare_bits(self.bits, o.bits) <= 0

    def __gt__(self, o):
        if not isinstance(o, BitInteger):
            return NotImplemented
        return base.compare_bits(self.bits, o.bits) > 0

    def __ge__(self, o):
        if not isinstance(o, BitInteger):
            return NotImplemented
        return base.compare_bits(self.bits, o.bits) >= 0

    def and_(self, u):
        '''
        Logical AND, aligned at the ones place. Keeps this instance's width, and
        the bits with no counterpart in `u` are cleared (AND with an implicit 0).
        '''
        u = self._check_operand(u)
        num_common = min(self.num_bits, u.num_bits)
        bits = np.zeros(self.num_bits, dtype=bool)
        bits[self.num_bits - num_common:] = np.logical_and(
            self.bits[self.num_bits - num_common:],
            u.bits[u.num_bits - num_common:],
        )
        self.bits = bits

    def or_(self, u):
        '''
        Logical OR, aligned at the ones place. The shorter operand is padded with
        leading zeros, so this instance grows if `u` is wider.
        '''
        u = self._check_operand(u)
        num_bits = max(self.num_bits, u.num_bits)
        self.bits = np.logical_or(base.zero_extend(self.bits, num_bits), base.zero_extend(u.bits, num_bits))

    def xor(self, u):
        '''
        Logical XOR, with the same alignment and padding as or_().
        '''
        u = self._check_operand(u)
        num_bits = max(self.num_bits, u.num_bits)
        self.bits = np.logical_xor(base.zero_extend(self.bits, num_bits), base.zero_extend(u.bits, num_bits))

    def invert(self):
        self.bits = np.logical_not(self.bits)

    def add(self, u):
        '''
        Ripple-carry addition. Both operands are padded to the wider width, and a
        carry out of the most-significant bit adds one more leading bit.
        '''
        u = self._check_operand(u)
        num_bits = max(self.num_bits, u.num_bits)
        total, carry = base.ripple_add(base.zero_extend(self.bits, num_bits), base.zero_extend(u.bits, num_bits))
        if carry:
            total = np.concatenate((np.ones(1, dtype=bool), total))
        self.bits = total

    def negate(self):
        '''
        Two's complement negation: invert every bit, then add one. Only meaningful
        when the result is read back as two's complement, which is what sub() and
        to_signed_int() do. Negating zero carries out, so it grows by one bit.
        '''
        self.invert()
        self.add(BitInteger.from_bits([True]))  # 0b1, so 1-bit values stay 1 bit wide

    def sub(self, u):
        '''
        Subtraction as the addition of the two's complement negation of `u`. Both
        operands get one extra leading zero first so that they read as non-negative
        signed values. A negative result is clamped to zero instead of wrapping.
        '''
        u = self._check_operand(u)
        num_bits = max(self.num_bits, u.num_bits)
        work_num_bits = num_bits + 1

        neg_u = u.clone()
        neg_u._resize(work_num_bits)
        neg_u.negate()
        neg_u._resize(work_num_bits)  # negating zero carries out

        self._resize(work_num_bits)
        self.add(neg_u)
        self._resize(work_num_bits)

        if self.bits[0]:
            logging.debug(f"Subtraction of {u} underflows, clamping to zero.")
            self.bits = np.zeros(num_bits, dtype=bool)
        else:
            self._resize(num_bits)

    def mul(self, u):
        '''
        Booth's algorithm multiplication. The product of an n-bit and an m-bit
        value has n + m bits.

        The multiplicand M and the multiplier Q each get one extra leading zero so
        that they are non-negative in two's complement. For every bit of Q, look at
        its least-significant bit q0 and the previously shifted out bit q-1:
        10 subtracts M from the accumulator A, 01 adds it, 00 and 11 do nothing.
        Then [A, Q, q-1] shifts right by one bit, keeping the sign of A.
        '''
        u = self._check_operand(u)
        num_bits = self.num_bits + u.num_bits
        multiplicand = base.zero_extend(self.bits, self.num_bits + 1)
        multiplier = base.zero_extend(u.bits, u.num_bits + 1)
        num_steps = len(multiplier)
        logging.debug(f"Multiplying {self.num_bits:,d}-bit by {u.num_bits:,d}-bit values in {num_steps:,d} steps.")

        acc = np.zeros(len(multiplicand), dtype=bool)
        q_prev = False
        for _ in range(num_steps):
            q0 = bool(multiplier[-1])
            if q0 and not q_prev:
                acc = base.wrapping_sub(acc, multiplicand)
            elif q_prev and not q0:
                acc = base.wrapping_add(acc, multiplicand)
            acc, shifted_out = base.arith_shift_right(acc)
            multiplier, q_prev = base.arith_shift_right(multiplier, fill=shifted_out)

        self.bits = base.truncate(np.concatenate((acc, multiplier)), num_bits)

    '''
    Pure operators, each working on a clone of the left operand.
    '''
    def _pure(self, method, o):
        if not isinstance(o, BitInteger):
            return NotImplemented
        result = self.clone()
        method(result, o)
        return result

    def __and__(self, o): return self._pure(BitInteger.and_, o)
    def __or__(self, o): return self._pure(BitInteger.or_, o)
    def __xor__(self, o): return self._pure(BitInteger.xor, o)
    def __add__(self, o): return self._pure(BitInteger.add, o)
    def __sub__(self, o): return self._pure(BitInteger.sub, o)
    def __mul__(self, o): return self._pure(BitInteger.mul, o)

    def __neg__(self):
        result = self.clone()
        result.negate()
        return result

    def __invert__(self):
        result = self.clone()
        result.invert()
        return result

    '''
    In-place operators, which just call the named methods.
    '''
    def _inplace(self, method, o):
        if not isinstance(o, BitInteger):
            return NotImplemented
        method(self, o)
        return self

    def __iand__(self, o): return self._inplace(BitInteger.and_, o)
    def __ior__(self, o): return self._inplace(BitInteger.or_, o)
    def __ixor__(self, o): return self._inplace(BitInteger.xor, o)
    def __iadd__(self, o): return self._inplace(BitInteger.add, o)
    def __isub__(self, o): return self._inplace(BitInteger.sub, o)
    def __imul__(self, o): return self._inplace(BitInteger.mul, o)
