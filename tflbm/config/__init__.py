from .input_constants import InputConstants, read_input
