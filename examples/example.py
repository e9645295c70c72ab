import sys

from chipax import Processor, Rom, Instruction, Op
from chipax.disassemble import format_listing
from chipax.logging import TraceLogger


def hex_digits_program():
    """Draws the digits 0-F across the screen, then spins."""
    program = [Instruction(op=Op.LD_VX_BYTE, x=0, kk=0),   # V0 = digit
               Instruction(op=Op.LD_VX_BYTE, x=1, kk=1),   # V1 = x
               Instruction(op=Op.LD_VX_BYTE, x=2, kk=1)]   # V2 = y
    loop = 0x200 + 2 * len(program)
    program += [
        Instruction(op=Op.LD_F_VX, x=0),
        Instruction(op=Op.DRW, x=1, y=2, n=5),
        Instruction(op=Op.ADD_VX_BYTE, x=0, kk=1),
        Instruction(op=Op.ADD_VX_BYTE, x=1, kk=8),
        Instruction(op=Op.SE_VX_BYTE, x=0, kk=8),
        Instruction(op=Op.JP, addr=loop + 16),
        Instruction(op=Op.LD_VX_BYTE, x=1, kk=1),
        Instruction(op=Op.ADD_VX_BYTE, x=2, kk=8),
        Instruction(op=Op.SE_VX_BYTE, x=0, kk=16),
        Instruction(op=Op.JP, addr=loop),
    ]
    end = 0x200 + 2 * len(program)
    program.append(Instruction(op=Op.JP, addr=end))
    return Rom.from_instructions(program)


if __name__ == "__main__":
    rom = hex_digits_program()
    print(format_listing(rom.data))

    log_level = "DEBUG" if "--trace" in sys.argv else "INFO"
    processor = Processor(logger=TraceLogger(log_level=log_level))
    processor.load(rom)
    processor.run(200, progress=True)

    frame = processor.framebuffer_snapshot()
    for y in range(frame.shape[1]):
        print("".join("#" if frame[x, y] else "." for x in range(frame.shape[0])))
