"""CPU core: registers, decoder, operand resolver, ALU."""
