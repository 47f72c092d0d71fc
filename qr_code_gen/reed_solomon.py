from .galois import GF

MAX_GENERATOR_DEGREE = 68


# create the generator polynomials for 1 to MAX_GENERATOR_DEGREE error correction words
# each one is the previous one multiplied by (x - α^(n-1)), coefficients highest degree first
def _create_generator_polynomials(max_degree, gf):
    generators = {}
    generator = [1]
    for degree in range(1, max_degree + 1):
        generator = gf.multiply_polynomials(generator, [1, gf.exp(degree - 1)])
        generators[degree] = tuple(generator)
    return generators


GENERATOR_POLYNOMIALS = _create_generator_polynomials(MAX_GENERATOR_DEGREE, GF)


def generator_polynomial(num_codewords):
    return GENERATOR_POLYNOMIALS[num_codewords]


# calculate error correction codewords using polynomial division in GF(256)
def calculate_error_correction(message_ints, num_codewords, gf=GF):
    generator_coeffs = generator_polynomial(num_codewords)

    # pad message with zeros according to generator polynomial degree
    dividend = list(message_ints) + [0] * num_codewords

    # perform polynomial division
    for i in range(len(message_ints)):
        factor = dividend[i]
        if factor != 0:
            for j, coeff in enumerate(generator_coeffs):
                dividend[i + j] ^= gf.multiply(coeff, factor)

    # return the remainder (error correction codewords)
    return dividend[len(message_ints):]
