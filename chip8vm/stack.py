"""CHIP-8 stack operations."""

from chip8vm.constants import STACK_SIZE
from chip8vm.errors import StackOverflow, StackUnderflow
from chip8vm.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push return address onto stack."""
    if stack.pointer >= STACK_SIZE:
        raise StackOverflow(address)
    new_data = stack.data.at[stack.pointer].set(address)
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop return address from stack."""
    if stack.pointer <= 0:
        raise StackUnderflow()
    new_pointer = stack.pointer - 1
    popped_address = int(stack.data[new_pointer])
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
