"""
Single-step SHA-256 state machine.

Phases and what entering each one does:
- PADDING:     pad the message and parse it into blocks
- SCHEDULING:  expand the current block's 64-word schedule and load the
               working registers from the running hash
- COMPRESSING: execute one compression round (64 per block); the step
               running round 64 folds the working registers into the hash
               and moves on to SCHEDULING (next block) or COMPLETE, so only
               block 0 has a step of its own for scheduling
- COMPLETE:    digest fixed

Steps for an n-block message: 2 + 64 * n (padding, first schedule, rounds).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .counters import StepCounter
from .sha256_core import (
    H0,
    K,
    ROUNDS,
    Block,
    Registers,
    compress_round,
    digest_to_hex,
    expand_schedule,
    fold_registers,
    pad_message,
    parse_blocks,
)
from .trace import TraceRecorder
from .utils import to_message_bytes

_NO_CHANGE = (False,) * 8


class ShaPhase(Enum):
    IDLE = "idle"
    PADDING = "padding"
    SCHEDULING = "scheduling"
    COMPRESSING = "compressing"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ShaSnapshot:
    """
    Complete, immutable view of the SHA-256 step machine.

    ``padded``/``blocks`` are empty while IDLE and ``schedule`` is empty
    until the first SCHEDULING step. ``round`` counts compression rounds
    already run on ``block_index``. ``changed`` flags the working
    registers altered by the most recent compression round and
    ``last_round_registers`` holds that round's output (None after a
    non-round step). After a block handover ``working`` is already the
    reloaded hash while ``prev_working``, ``changed`` and
    ``last_round_registers`` still describe round 64 of the previous block.
    """

    message: bytes
    padded: bytes
    blocks: tuple[Block, ...]
    block_index: int
    schedule: tuple[int, ...]
    working: Registers
    prev_working: Registers
    hash_registers: Registers
    round: int
    changed: tuple[bool, ...]
    phase: ShaPhase
    step_index: int
    digest: Registers | None = None
    last_round_registers: Registers | None = None

    @property
    def is_complete(self) -> bool:
        return self.phase is ShaPhase.COMPLETE

    @property
    def digest_hex(self) -> str | None:
        if self.digest is None:
            return None
        return digest_to_hex(self.digest)

    @property
    def num_blocks(self) -> int:
        return len(self.blocks)


@dataclass(frozen=True)
class ShaStep:
    """One transition: snapshot before, phase entered, snapshot after."""

    before: ShaSnapshot
    phase: ShaPhase | None
    after: ShaSnapshot
    # Registers produced by a compression round, before any reload for the
    # next block. None for non-round steps.
    registers: Registers | None = None

    @property
    def changed(self) -> bool:
        return self.before is not self.after


def initial_sha_snapshot(message: str | bytes) -> ShaSnapshot:
    """Build the idle snapshot for a fresh hash computation."""
    return ShaSnapshot(
        message=to_message_bytes(message),
        padded=b"",
        blocks=(),
        block_index=0,
        schedule=(),
        working=H0,
        prev_working=H0,
        hash_registers=H0,
        round=0,
        changed=_NO_CHANGE,
        phase=ShaPhase.IDLE,
        step_index=0,
    )


def _enter_scheduling(snapshot: ShaSnapshot, block_index: int, hash_registers: Registers,
                      **changes) -> ShaSnapshot:
    return replace(
        snapshot,
        block_index=block_index,
        schedule=expand_schedule(snapshot.blocks[block_index]),
        working=hash_registers,
        hash_registers=hash_registers,
        round=0,
        phase=ShaPhase.SCHEDULING,
        step_index=snapshot.step_index + 1,
        **changes,
    )


def next_sha_step(snapshot: ShaSnapshot) -> ShaStep:
    """
    Perform exactly one unit of work.

    A complete snapshot is returned unchanged (phase None).
    """
    phase = snapshot.phase

    if phase is ShaPhase.COMPLETE:
        return ShaStep(before=snapshot, phase=None, after=snapshot)

    if phase is ShaPhase.IDLE:
        padded = pad_message(snapshot.message)
        after = replace(
            snapshot,
            padded=padded,
            blocks=parse_blocks(padded),
            phase=ShaPhase.PADDING,
            step_index=snapshot.step_index + 1,
        )
        return ShaStep(before=snapshot, phase=after.phase, after=after)

    if phase is ShaPhase.PADDING:
        after = _enter_scheduling(
            snapshot, 0, snapshot.hash_registers,
            prev_working=snapshot.hash_registers, changed=_NO_CHANGE,
            last_round_registers=None,
        )
        return ShaStep(before=snapshot, phase=after.phase, after=after)

    # SCHEDULING or COMPRESSING: run one compression round
    t = snapshot.round
    new_working = compress_round(snapshot.working, snapshot.schedule[t], K[t])
    changed = tuple(n != o for n, o in zip(new_working, snapshot.working))

    if t + 1 < ROUNDS:
        after = replace(
            snapshot,
            working=new_working,
            prev_working=snapshot.working,
            round=t + 1,
            changed=changed,
            last_round_registers=new_working,
            phase=ShaPhase.COMPRESSING,
            step_index=snapshot.step_index + 1,
        )
        return ShaStep(before=snapshot, phase=after.phase, after=after, registers=new_working)

    new_hash = fold_registers(snapshot.hash_registers, new_working)
    next_block = snapshot.block_index + 1
    if next_block < snapshot.num_blocks:
        after = _enter_scheduling(
            snapshot, next_block, new_hash,
            prev_working=snapshot.working, changed=changed,
            last_round_registers=new_working,
        )
    else:
        after = replace(
            snapshot,
            working=new_working,
            prev_working=snapshot.working,
            hash_registers=new_hash,
            round=ROUNDS,
            changed=changed,
            last_round_registers=new_working,
            phase=ShaPhase.COMPLETE,
            step_index=snapshot.step_index + 1,
            digest=new_hash,
        )
    return ShaStep(before=snapshot, phase=after.phase, after=after, registers=new_working)


class Sha256Stepper:
    """
    Externally driven SHA-256 step machine.

    Each instance owns its own snapshot, history and counter; nothing is
    shared between instances.
    """

    def __init__(self, message: str | bytes, tracer: TraceRecorder | None = None):
        self.tracer = tracer
        self.step_counter = StepCounter()
        self._snapshot = initial_sha_snapshot(message)
        self._history: list[ShaStep] = []

    def reset(self, message: str | bytes | None = None) -> ShaSnapshot:
        """Discard progress and restart from the original (or new) message."""
        if message is None:
            message = self._snapshot.message
        self._snapshot = initial_sha_snapshot(message)
        self._history.clear()
        self.step_counter.reset()
        return self._snapshot

    def advance(self) -> ShaSnapshot:
        """Perform one step and return the new snapshot."""
        step = next_sha_step(self._snapshot)
        if step.phase is None:
            return self._snapshot

        before = step.before
        self._history.append(step)
        self._snapshot = step.after

        is_round = before.phase in (ShaPhase.SCHEDULING, ShaPhase.COMPRESSING)
        operation = "compress" if is_round else step.phase.value
        self.step_counter.increment(operation)

        if self.tracer:
            after = step.after
            if is_round:
                self.tracer.record(
                    step=after.step_index,
                    block=before.block_index,
                    round=before.round + 1,
                    operation=operation,
                    phase=after.phase.value,
                    registers=step.registers,
                    prev_registers=before.working,
                )
            else:
                self.tracer.record(
                    step=after.step_index,
                    block=after.block_index,
                    round=after.round,
                    operation=operation,
                    phase=after.phase.value,
                    registers=after.working,
                    num_blocks=after.num_blocks,
                )
        return self._snapshot

    def is_complete(self) -> bool:
        return self._snapshot.is_complete

    def run_phase(self) -> ShaSnapshot:
        """Advance until the phase changes (or the machine completes)."""
        start = self._snapshot.phase
        self.advance()
        while not self.is_complete() and self._snapshot.phase is start:
            self.advance()
        return self._snapshot

    def run_to_completion(self) -> str:
        """Advance until the digest is fixed and return it as hex."""
        while not self.is_complete():
            self.advance()
        return self._snapshot.digest_hex

    @property
    def snapshot(self) -> ShaSnapshot:
        return self._snapshot

    @property
    def history(self) -> list[ShaStep]:
        return list(self._history)

    @property
    def digest_hex(self) -> str | None:
        return self._snapshot.digest_hex

    @property
    def steps(self) -> int:
        """Get total steps executed."""
        return self.step_counter.count


def hash_stepped(
    message: str | bytes,
    tracer: TraceRecorder | None = None,
) -> tuple[str, int]:
    """
    Convenience function to hash by stepping the machine to the end.

    Returns:
        Tuple of (hex digest, steps)
    """
    stepper = Sha256Stepper(message, tracer=tracer)
    digest = stepper.run_to_completion()
    return digest, stepper.steps
