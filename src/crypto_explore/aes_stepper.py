"""
Single-step AES-128 encryption state machine.

Schedule (one transform per step):
- Setup:      AddRoundKey with round key 0 (not a step; it defines the
              state entering round 1)
- Rounds 1-9: SubBytes -> ShiftRows -> MixColumns -> AddRoundKey
- Round 10:   SubBytes -> ShiftRows -> AddRoundKey  (no MixColumns)

Total: 39 steps.

The transition function ``next_aes_step`` is pure: it maps a frozen
snapshot to a (before, operation, after) triple. ``AesStepper`` wraps it
with history, step accounting and optional tracing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .aes_core import (
    NUM_ROUNDS,
    key_expansion,
    sub_bytes,
    shift_rows,
    mix_columns,
    add_round_key,
)
from .counters import StepCounter
from .trace import TraceRecorder
from .utils import (
    FrozenMask,
    FrozenState,
    bytes_to_state,
    count_changed,
    diff_mask,
    freeze_state,
    state_to_bytes,
)


class AesOperation(Enum):
    """Position inside an AES round."""

    IDLE = "idle"
    SUBSTITUTE = "SubBytes"
    SHIFT = "ShiftRows"
    MIX = "MixColumns"
    KEY_XOR = "AddRoundKey"


class AesPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"


FULL_ROUND_OPS = (
    AesOperation.SUBSTITUTE,
    AesOperation.SHIFT,
    AesOperation.MIX,
    AesOperation.KEY_XOR,
)
FINAL_ROUND_OPS = (
    AesOperation.SUBSTITUTE,
    AesOperation.SHIFT,
    AesOperation.KEY_XOR,
)

TOTAL_STEPS = (NUM_ROUNDS - 1) * len(FULL_ROUND_OPS) + len(FINAL_ROUND_OPS)

_NO_CHANGE: FrozenMask = tuple(tuple(False for _ in range(4)) for _ in range(4))


def round_operations(round_num: int) -> tuple[AesOperation, ...]:
    """Operations executed in the given round (1-10)."""
    if not 1 <= round_num <= NUM_ROUNDS:
        raise ValueError(f"Round must be 1..{NUM_ROUNDS}, got {round_num}")
    return FINAL_ROUND_OPS if round_num == NUM_ROUNDS else FULL_ROUND_OPS


@dataclass(frozen=True)
class AesSnapshot:
    """
    Complete, immutable view of the AES step machine.

    ``operation`` is the last transform applied in ``round`` (IDLE before
    the round's first transform). ``state`` therefore always equals the
    round's operations up to and including ``operation`` applied to the
    state that ended the previous round.
    """

    plaintext: bytes
    key: bytes
    round_keys: tuple[FrozenState, ...]
    round: int
    operation: AesOperation
    last_operation: AesOperation | None
    state: FrozenState
    prev_state: FrozenState
    diff: FrozenMask
    bytes_changed: int
    rounds_completed: int
    step_index: int
    phase: AesPhase

    @property
    def is_complete(self) -> bool:
        return self.phase is AesPhase.COMPLETE

    @property
    def ciphertext(self) -> bytes | None:
        """Ciphertext once the final AddRoundKey has run, else None."""
        if not self.is_complete:
            return None
        return state_to_bytes(self.state)

    @property
    def state_bytes(self) -> bytes:
        return state_to_bytes(self.state)


@dataclass(frozen=True)
class AesStep:
    """One transition: snapshot before, transform applied, snapshot after."""

    before: AesSnapshot
    operation: AesOperation | None
    after: AesSnapshot

    @property
    def changed(self) -> bool:
        return self.before is not self.after


def initial_aes_snapshot(plaintext: bytes, key: bytes) -> AesSnapshot:
    """
    Build the idle snapshot for a fresh encryption.

    Expands the key and applies the pre-round key mixing so the visible
    state is the one entering round 1.

    Args:
        plaintext: 16-byte plaintext block
        key: 16-byte AES-128 key
    """
    if len(key) != 16:
        raise ValueError(f"Key must be 16 bytes, got {len(key)}")
    if len(plaintext) != 16:
        raise ValueError(f"Plaintext must be 16 bytes, got {len(plaintext)}")

    round_keys = tuple(freeze_state(rk) for rk in key_expansion(key))
    pt_state = bytes_to_state(plaintext)
    state_in = add_round_key(pt_state, round_keys[0])

    return AesSnapshot(
        plaintext=bytes(plaintext),
        key=bytes(key),
        round_keys=round_keys,
        round=1,
        operation=AesOperation.IDLE,
        last_operation=None,
        state=freeze_state(state_in),
        prev_state=freeze_state(pt_state),
        diff=_NO_CHANGE,
        bytes_changed=0,
        rounds_completed=0,
        step_index=0,
        phase=AesPhase.IDLE,
    )


def _apply(op: AesOperation, state: FrozenState, round_key: FrozenState) -> list[list[int]]:
    if op is AesOperation.SUBSTITUTE:
        return sub_bytes(state)
    if op is AesOperation.SHIFT:
        return shift_rows(state)
    if op is AesOperation.MIX:
        return mix_columns(state)
    if op is AesOperation.KEY_XOR:
        return add_round_key(state, round_key)
    raise ValueError(f"Not a round transform: {op}")


def next_aes_step(snapshot: AesSnapshot) -> AesStep:
    """
    Perform exactly one transform.

    A complete snapshot is returned unchanged (operation None).
    """
    if snapshot.is_complete:
        return AesStep(before=snapshot, operation=None, after=snapshot)

    round_num = snapshot.round
    ops = round_operations(round_num)
    if snapshot.operation is AesOperation.IDLE:
        op = ops[0]
    else:
        op = ops[ops.index(snapshot.operation) + 1]

    new_state = freeze_state(_apply(op, snapshot.state, snapshot.round_keys[round_num]))
    mask = diff_mask(snapshot.state, new_state)

    next_round = round_num
    next_op = op
    rounds_completed = snapshot.rounds_completed
    phase = AesPhase.RUNNING
    if op is ops[-1]:
        rounds_completed = round_num
        if round_num == NUM_ROUNDS:
            phase = AesPhase.COMPLETE
        else:
            next_round = round_num + 1
            next_op = AesOperation.IDLE

    after = AesSnapshot(
        plaintext=snapshot.plaintext,
        key=snapshot.key,
        round_keys=snapshot.round_keys,
        round=next_round,
        operation=next_op,
        last_operation=op,
        state=new_state,
        prev_state=snapshot.state,
        diff=mask,
        bytes_changed=count_changed(mask),
        rounds_completed=rounds_completed,
        step_index=snapshot.step_index + 1,
        phase=phase,
    )
    return AesStep(before=snapshot, operation=op, after=after)


class AesStepper:
    """
    Externally driven AES-128 step machine.

    Each instance owns its own snapshot, history and counter; nothing is
    shared between instances.
    """

    def __init__(
        self,
        plaintext: bytes,
        key: bytes,
        tracer: TraceRecorder | None = None,
    ):
        """
        Initialize the step machine.

        Args:
            plaintext: 16-byte plaintext block
            key: 16-byte AES-128 key
            tracer: Optional trace recorder for verbose output
        """
        self.tracer = tracer
        self.step_counter = StepCounter()
        self._snapshot = initial_aes_snapshot(plaintext, key)
        self._history: list[AesStep] = []

    def reset(self, plaintext: bytes | None = None, key: bytes | None = None) -> AesSnapshot:
        """
        Discard progress and restart from the original (or new) input.
        """
        if plaintext is None:
            plaintext = self._snapshot.plaintext
        if key is None:
            key = self._snapshot.key
        self._snapshot = initial_aes_snapshot(plaintext, key)
        self._history.clear()
        self.step_counter.reset()
        return self._snapshot

    def advance(self) -> AesSnapshot:
        """Apply one transform and return the new snapshot."""
        step = next_aes_step(self._snapshot)
        if step.operation is None:
            return self._snapshot

        self._history.append(step)
        self._snapshot = step.after
        self.step_counter.increment(step.operation.value)

        if self.tracer:
            after = step.after
            self.tracer.record(
                step=after.step_index,
                round=step.before.round,
                operation=step.operation.value,
                state=after.state,
                prev_state=after.prev_state,
                bytes_changed=after.bytes_changed,
            )
        return self._snapshot

    def is_complete(self) -> bool:
        return self._snapshot.is_complete

    def run_to_completion(self) -> bytes:
        """Advance until the ciphertext is available and return it."""
        while not self.is_complete():
            self.advance()
        return self._snapshot.ciphertext

    @property
    def snapshot(self) -> AesSnapshot:
        return self._snapshot

    @property
    def history(self) -> list[AesStep]:
        return list(self._history)

    @property
    def round_keys(self) -> tuple[FrozenState, ...]:
        return self._snapshot.round_keys

    @property
    def ciphertext(self) -> bytes | None:
        return self._snapshot.ciphertext

    @property
    def steps(self) -> int:
        """Get total steps executed."""
        return self.step_counter.count


def encrypt_stepped(
    key: bytes,
    plaintext: bytes,
    tracer: TraceRecorder | None = None,
) -> tuple[bytes, int]:
    """
    Convenience function to encrypt by stepping the machine to the end.

    Args:
        key: 16-byte AES key
        plaintext: 16-byte plaintext
        tracer: Optional trace recorder

    Returns:
        Tuple of (ciphertext, steps)
    """
    stepper = AesStepper(plaintext, key, tracer=tracer)
    ciphertext = stepper.run_to_completion()
    return ciphertext, stepper.steps
