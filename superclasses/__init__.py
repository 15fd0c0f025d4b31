"""
superclasses — вспомогательная библиотека с численным ядром.

Пакеты:
- core.math       : Numbers, Rational, Complex, Matrix, Vector, Angle
- core.contracts  : JSON Schema контракты для массивов Matrix/Vector

Библиотека не настраивает logging: к корневому логгеру пакета подключён
только NullHandler.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
