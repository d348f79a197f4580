# pyright: strict
from typing import Tuple, TypeVar

'''Utility methods for mathematical operations.'''

Vec3f = Tuple[float, float, float]
Mat3x3f = Tuple[Vec3f, Vec3f, Vec3f]
TNumber = TypeVar("TNumber", int, float)


def clamp(min: TNumber, max: TNumber, input: TNumber) -> TNumber:
  '''
  Clamps a number between two numbers.
  :return: input when min <= input <= max, and either min or max otherwise.
  '''
  if input < min:
    return min
  elif input > max:
    return max
  return input


def matrix_multiply(row: Vec3f, matrix: Mat3x3f) -> Vec3f:
  '''Multiplies a 1x3 row vector with a 3x3 matrix.'''
  a = row[0] * matrix[0][0] + row[1] * matrix[0][1] + row[2] * matrix[0][2]
  b = row[0] * matrix[1][0] + row[1] * matrix[1][1] + row[2] * matrix[1][2]
  c = row[0] * matrix[2][0] + row[1] * matrix[2][1] + row[2] * matrix[2][2]
  return (a, b, c)
