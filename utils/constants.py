"""Format constants for the BlurHash text encoding."""

BASE83_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz#$%*+,-.:;=?@[]^_{|}~"

MIN_COMPONENTS = 1
MAX_COMPONENTS = 9

# Quantization of the shared AC scale: max = (q + 1) / AC_MAX_SCALE
AC_MAX_SCALE = 166.0
AC_MAX_LEVELS = 82

# Per-channel AC digit is in [0, AC_LEVELS - 1]
AC_LEVELS = 19

SHAPE_DIGITS = 1
MAX_DIGITS = 1
DC_DIGITS = 4
AC_DIGITS = 2

SUBSAMPLING_RATIOS = ('4:4:4', '4:2:2', '4:2:0', '4:4:0', '4:1:1', '4:1:0')
