"""Tests for ALU operations (8xxx)."""

import pytest
from chipax import execute, create_state
from chipax.instructions.alu import alu_add


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x42))
        state = state.replace(V=state.V.at[2].set(0x99))

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0xF0))
        state = state.replace(V=state.V.at[2].set(0x0F))

        state = execute(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0xF0))
        state = state.replace(V=state.V.at[2].set(0xF1))

        state = execute(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0xF0

    def test_alu_xor_same(self, fresh_state):
        """8XY3 - XOR with same value should be 0."""
        state = fresh_state
        state = state.replace(V=state.V.at[3].set(0xAA))
        state = state.replace(V=state.V.at[4].set(0xAA))

        state = execute(state, 0x8343)  # V3 ^= V4

        assert state.V[3] == 0x00

    def test_logic_leaves_flag_alone(self, fresh_state):
        """Logical operations do not touch VF."""
        state = fresh_state.replace(V=fresh_state.V.at[15].set(0x07))
        for opcode in (0x8120, 0x8121, 0x8122, 0x8123):
            state = execute(state, opcode)
            assert state.V[15] == 0x07


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    def test_alu_add_no_carry(self, fresh_state):
        """8XY4 - Add without carry."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x10))
        state = state.replace(V=state.V.at[2].set(0x20))

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 0x30
        assert state.V[15] == 0

    def test_alu_add_with_carry(self, fresh_state):
        """8XY4 - Add with carry."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0xFF))
        state = state.replace(V=state.V.at[2].set(0x01))

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 0x00  # 256 wraps to 0
        assert state.V[15] == 1  # Carry set

    @pytest.mark.parametrize("a,b", [
        (0, 0), (1, 254), (1, 255), (128, 128), (200, 55), (200, 56), (255, 255), (17, 3),
    ])
    def test_add_flag_law(self, fresh_state, a, b):
        """LD V0, a; LD V1, b; ADD V0, V1 gives (a+b) mod 256 and carry iff a+b > 255."""
        state = execute(fresh_state, 0x6000 | a)
        state = execute(state, 0x6100 | b)
        state = execute(state, 0x8014)

        assert state.V[0] == (a + b) % 256
        assert state.V[15] == int(a + b > 255)

    def test_add_flag_law_all_pairs(self):
        """ADD gives (a+b) mod 256 and carry iff a+b > 255, for every byte pair."""
        for a in range(256):
            for b in range(256):
                assert alu_add(a, b) == ((a + b) % 256, int(a + b > 255))

    def test_alu_sub_xy_no_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, no borrow."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x30))
        state = state.replace(V=state.V.at[2].set(0x10))

        state = execute(state, 0x8125)  # V1 -= V2

        assert state.V[1] == 0x20
        assert state.V[15] == 1  # No borrow (VX >= VY)

    def test_alu_sub_xy_equal(self, fresh_state):
        """8XY5 - Equal operands do not borrow."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x30))
        state = state.replace(V=state.V.at[2].set(0x30))

        state = execute(state, 0x8125)

        assert state.V[1] == 0
        assert state.V[15] == 1

    def test_alu_sub_xy_wraps_on_borrow(self, fresh_state):
        """8XY5 - Borrow wraps modulo 256 instead of clamping to zero."""
        state = fresh_state
        state = state.replace(V=state.V.at[3].set(0x10))
        state = state.replace(V=state.V.at[4].set(0x20))

        state = execute(state, 0x8345)  # V3 -= V4

        assert state.V[3] == 0xF0
        assert state.V[15] == 0  # Borrow (VX < VY)

    def test_alu_sub_yx_no_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, no borrow."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x10))
        state = state.replace(V=state.V.at[2].set(0x30))

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == 0x20  # 48 - 16 = 32
        assert state.V[15] == 1  # No borrow (VY >= VX)

    def test_alu_sub_yx_wraps_on_borrow(self, fresh_state):
        """8XY7 - Borrow wraps modulo 256."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x30))
        state = state.replace(V=state.V.at[2].set(0x10))

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == 0xE0
        assert state.V[15] == 0

    def test_flag_register_as_destination(self, fresh_state):
        """8FY4 - The flag wins over the result when VX is VF."""
        state = fresh_state
        state = state.replace(V=state.V.at[15].set(0xFF))
        state = state.replace(V=state.V.at[1].set(0x03))

        state = execute(state, 0x8F14)  # VF += V1 (overflows)

        assert state.V[15] == 1


class TestALUShifts:
    """Test shift operations with both shift sources."""

    def test_shift_right_even(self, fresh_state):
        """8XY6 - Shift right, even number."""
        state = fresh_state.replace(V=fresh_state.V.at[1].set(0x04))
        state = state.replace(V=state.V.at[2].set(0xFF))  # Should be ignored

        state = execute(state, 0x8126)  # V1 >>= 1

        assert state.V[1] == 0x02
        assert state.V[15] == 0  # LSB was 0

    def test_shift_right_odd(self, fresh_state):
        """8XY6 - Shift right, odd number."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x05))
        state = state.replace(V=state.V.at[4].set(0xFF))  # Should be ignored

        state = execute(state, 0x8346)  # V3 >>= 1

        assert state.V[3] == 0x02
        assert state.V[15] == 1  # LSB was 1

    def test_shift_left_overflow(self, fresh_state):
        """8XYE - Shift left with the top bit set."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x81))  # 10000001
        state = state.replace(V=state.V.at[4].set(0xFF))  # Should be ignored

        state = execute(state, 0x834E)  # V3 <<= 1

        assert state.V[3] == 0x02  # 129 << 1 = 258 → 2
        assert state.V[15] == 1  # MSB was 1

    def test_shift_left_no_overflow(self, fresh_state):
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x41))

        state = execute(state, 0x834E)

        assert state.V[3] == 0x82
        assert state.V[15] == 0

    def test_shift_right_from_vy(self, vy_shift_state):
        """8XY6 - Shift right reading VY when configured."""
        state = vy_shift_state.replace(V=vy_shift_state.V.at[5].set(0x08))  # Should be ignored
        state = state.replace(V=state.V.at[6].set(0x03))  # 00000011

        state = execute(state, 0x8566)  # V5 = V6 >> 1

        assert state.V[5] == 0x01
        assert state.V[6] == 0x03
        assert state.V[15] == 1  # LSB of V6 was 1

    def test_shift_source_comparison(self):
        """Test that shift_uses_vy switches the shift source."""
        state_vx = create_state(shift_uses_vy=False)
        state_vx = execute(state_vx, 0x6140)  # V1 = 0x40
        state_vx = execute(state_vx, 0x6281)  # V2 = 0x81
        state_vx = execute(state_vx, 0x812E)

        state_vy = create_state(shift_uses_vy=True)
        state_vy = execute(state_vy, 0x6140)
        state_vy = execute(state_vy, 0x6281)
        state_vy = execute(state_vy, 0x812E)

        assert state_vx.V[1] == 0x80 and state_vx.V[15] == 0
        assert state_vy.V[1] == 0x02 and state_vy.V[15] == 1
