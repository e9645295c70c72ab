"""Tests for control flow instructions."""

import pytest
from chipax import execute, create_state, set_key_state, StackOverflow, StackUnderflow


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1001)
        assert state.pc == 1

    def test_jump_with_offset(self, fresh_state):
        """BNNN - Jump with V0 offset."""
        state = execute(fresh_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0x6230)  # V2 = 0x30 (ignored)
        state = execute(state, 0xB250)  # Jump to 0x250 + V0
        assert state.pc == 0x260

    def test_jump_with_offset_masks_address(self, fresh_state):
        state = execute(fresh_state, 0x60FF)
        state = execute(state, 0xBFFF)
        assert state.pc == (0xFFF + 0xFF) & 0xFFF


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x42))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x41))
        initial_pc = state.pc

        state = execute(state, 0x3542)
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x10))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x20))
        initial_pc = state.pc

        state = execute(state, 0x4320)
        assert state.pc == initial_pc

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x55))
        initial_pc = state.pc

        state = execute(state, 0x5120)
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x44))
        initial_pc = state.pc

        state = execute(state, 0x5120)
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xAA))
        state = state.replace(V=state.V.at[8].set(0xBB))
        initial_pc = state.pc

        state = execute(state, 0x9780)
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xCC))
        state = state.replace(V=state.V.at[8].set(0xCC))
        initial_pc = state.pc

        state = execute(state, 0x9780)
        assert state.pc == initial_pc

    def test_skip_boundary_values(self, fresh_state):
        """Test skip instructions with boundary values."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0xFF))
        initial_pc = state.pc

        state = execute(state, 0x30FF)  # Skip if V0 == 255
        assert state.pc == initial_pc + 2


class TestKeySkips:
    """Test EX9E/EXA1."""

    def test_skip_if_key_pressed(self, fresh_state):
        state = execute(fresh_state, 0x6A07)  # VA = 7
        state = set_key_state(state, 1 << 7)
        initial_pc = state.pc

        assert execute(state, 0xEA9E).pc == initial_pc + 2
        assert execute(state, 0xEAA1).pc == initial_pc

    def test_skip_if_key_not_pressed(self, fresh_state):
        state = execute(fresh_state, 0x6A07)
        state = set_key_state(state, 1 << 6)
        initial_pc = state.pc

        assert execute(state, 0xEA9E).pc == initial_pc
        assert execute(state, 0xEAA1).pc == initial_pc + 2

    def test_key_index_uses_low_nibble(self, fresh_state):
        state = execute(fresh_state, 0x6A13)  # VA = 0x13 → key 3
        state = set_key_state(state, 1 << 3)
        assert execute(state, 0xEA9E).pc == state.pc + 2


class TestCallStack:
    """Test subroutine calls and stack discipline."""

    def test_call_pushes_return_address(self, fresh_state):
        state = fresh_state.replace(pc=fresh_state.pc + 2)  # as after fetch
        state = execute(state, 0x2300)

        assert state.pc == 0x300
        assert state.stack.pointer == 1
        assert state.stack.data[0] == 0x202

    def test_sixteen_nested_calls(self, fresh_state):
        state = fresh_state
        for _ in range(16):
            state = execute(state, 0x2300)
        assert state.stack.pointer == 16

    def test_seventeenth_call_overflows(self, fresh_state):
        state = fresh_state
        for _ in range(16):
            state = execute(state, 0x2300)
        with pytest.raises(StackOverflow):
            execute(state, 0x2300)
        # the failed call left the state as it was
        assert state.stack.pointer == 16

    def test_return_without_call_underflows(self, fresh_state):
        with pytest.raises(StackUnderflow):
            execute(fresh_state, 0x00EE)

    def test_custom_stack_depth(self):
        state = create_state(stack_depth=2)
        state = execute(state, 0x2300)
        state = execute(state, 0x2300)
        with pytest.raises(StackOverflow) as excinfo:
            execute(state, 0x2300)
        assert excinfo.value.depth == 2
