class GaloisField:
    """GF(256) as used by QR codes, generated by α = 2."""

    PRIMITIVE_POLY = 0b100011101  # x^8 + x^4 + x^3 + x^2 + 1

    def __init__(self):
        self.exp_table = [0] * 255
        self.log_table = [0] * 256

        # successive powers of α, reduced by the primitive polynomial
        value = 1
        for power in range(255):
            self.exp_table[power] = value
            self.log_table[value] = power
            value <<= 1
            if value & 0x100:
                value ^= self.PRIMITIVE_POLY

    def exp(self, n):
        return self.exp_table[n % 255]

    def log(self, a):
        if a == 0:
            raise ValueError("log(0) is undefined")
        return self.log_table[a]

    def multiply(self, a, b):
        if a == 0 or b == 0:
            return 0
        return self.exp(self.log(a) + self.log(b))

    def divide(self, a, b):
        if b == 0:
            raise ValueError("Division by zero")
        if a == 0:
            return 0
        return self.exp(self.log(a) - self.log(b))

    def scale_polynomial(self, poly, factor):
        return [self.multiply(coeff, factor) for coeff in poly]

    def multiply_polynomials(self, poly1, poly2):
        """Product of two polynomials, coefficients highest degree first."""
        result = [0] * (len(poly1) + len(poly2) - 1)
        for shift, factor in enumerate(poly1):
            # addition in GF(256) is XOR
            for i, term in enumerate(self.scale_polynomial(poly2, factor)):
                result[shift + i] ^= term
        return result

    def evaluate_polynomial(self, poly, x):
        # Horner's rule
        result = 0
        for coeff in poly:
            result = self.multiply(result, x) ^ coeff
        return result


# shared, read-only after construction
GF = GaloisField()
