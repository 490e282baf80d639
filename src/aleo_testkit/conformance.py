"""
Conformance checks for Aleo account SDKs.

An SDK is wrapped in an AccountBackend and run against the recorded account
data. Each check produces a CheckResult; the ConformanceReport collects them
and can be asserted from a test.

Example usage:
    ```python
    report = run_conformance(MySdkBackend())
    report.assert_passed()
    ```
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from . import account_data
from .account_data import ACCOUNTS, AccountFixture
from .keys import fingerprint, private_key_from_seed
from .program import Program, parse_program
from .types import AleoTestkitError, ConformanceError

logger = logging.getLogger(__name__)


class CheckStatus(Enum):
    """Outcome of a single conformance check."""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class CheckResult:
    """Result of one conformance check."""
    name: str
    status: CheckStatus
    detail: str = ""


@dataclass
class ConformanceConfig:
    """Configuration for a conformance run."""
    accounts: Tuple[AccountFixture, ...] = ACCOUNTS
    skip_unsupported: bool = True
    program_inputs: Tuple[str, ...] = ("3u32", "4u32")
    expected_program_output: str = "7u32"


@dataclass
class ConformanceReport:
    """Collected results of a conformance run."""
    results: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True if no check failed."""
        return not self.failures()

    def failures(self) -> List[CheckResult]:
        return [r for r in self.results if r.status == CheckStatus.FAILED]

    def result(self, name: str) -> Optional[CheckResult]:
        """Look up a check result by name."""
        for r in self.results:
            if r.name == name:
                return r
        return None

    def count(self, status: CheckStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    def summary(self) -> str:
        """One-line summary, e.g. "12 passed, 0 failed, 3 skipped"."""
        return ", ".join(f"{self.count(s)} {s.value}" for s in CheckStatus)

    def assert_passed(self) -> None:
        """
        Raise if any check failed.

        Raises:
            ConformanceError: Listing every failed check
        """
        failures = self.failures()
        if failures:
            lines = [f"{r.name}: {r.detail}" for r in failures]
            raise ConformanceError(f"{len(failures)} conformance checks failed:\n" + "\n".join(lines))


class AccountBackend(ABC):
    """
    Interface to the SDK under test.

    Methods an SDK does not support should raise NotImplementedError.
    """

    @abstractmethod
    def private_key_from_seed(self, seed: bytes) -> str:
        """Generate a private key string from a 32-byte seed."""
        ...

    @abstractmethod
    def derive_view_key(self, private_key: str) -> str:
        """Derive the view key string for a private key string."""
        ...

    @abstractmethod
    def derive_address(self, view_key: str) -> str:
        """Derive the address string for a view key string."""
        ...

    @abstractmethod
    def decrypt_record(self, ciphertext: str, key: str) -> Optional[str]:
        """
        Decrypt a record ciphertext with a private key or view key.

        Returns None, or raises RecordDecryptionError, if the key does not
        own the record. Any other AleoTestkitError or ValueError raised here
        also counts as a refusal.
        """
        ...

    @abstractmethod
    def parse_program(self, source: str) -> Program:
        """Parse program source text."""
        ...


class LocalBackend(AccountBackend):
    """
    Backend built from this package alone.

    Covers seeded key generation and program parsing. Key derivation and
    record decryption need curve arithmetic and are not supported.
    """

    def private_key_from_seed(self, seed: bytes) -> str:
        return private_key_from_seed(seed)

    def derive_view_key(self, private_key: str) -> str:
        raise NotImplementedError("View key derivation requires an SDK backend")

    def derive_address(self, view_key: str) -> str:
        raise NotImplementedError("Address derivation requires an SDK backend")

    def decrypt_record(self, ciphertext: str, key: str) -> Optional[str]:
        raise NotImplementedError("Record decryption requires an SDK backend")

    def parse_program(self, source: str) -> Program:
        return parse_program(source)


class _CheckFailed(Exception):
    """A check observed a value other than the expected one."""
    pass


def run_conformance(
    backend: AccountBackend,
    config: Optional[ConformanceConfig] = None,
) -> ConformanceReport:
    """
    Run every conformance check against a backend.

    Args:
        backend: The SDK under test
        config: Optional run configuration

    Returns:
        A ConformanceReport with one result per check
    """
    config = config or ConformanceConfig()
    report = ConformanceReport()

    def run(name: str, check: Callable[[], str]) -> None:
        report.results.append(_run_check(name, check, config))

    run("seed.deterministic", lambda: _check_seed_deterministic(backend))
    run("seed.pinned", lambda: _check_seed_pinned(backend))

    for account in config.accounts:
        run(f"view_key.{account.name}", lambda a=account: _check_view_key(backend, a))
        run(f"address.{account.name}", lambda a=account: _check_address(backend, a))

    run(
        "record.decrypt.private_key",
        lambda: _check_decrypts(backend, account_data.PRIVATE_KEY_STRING),
    )
    run(
        "record.decrypt.view_key",
        lambda: _check_decrypts(backend, account_data.VIEW_KEY_STRING),
    )
    run(
        "record.foreign_ciphertext",
        lambda: _check_rejected(
            backend, account_data.FOREIGN_CIPHERTEXT_STRING, account_data.PRIVATE_KEY_STRING
        ),
    )
    run(
        "record.foreign_view_key",
        lambda: _check_rejected(
            backend, account_data.RECORD_CIPHERTEXT_STRING, account_data.FOREIGN_VIEW_KEY_STRING
        ),
    )

    run("program.parse", lambda: _check_program_parse(backend))
    run("program.execute", lambda: _check_program_execute(backend, config))

    logger.debug("Conformance run finished: %s", report.summary())
    return report


def _run_check(name: str, check: Callable[[], str], config: ConformanceConfig) -> CheckResult:
    try:
        detail = check()
    except NotImplementedError as e:
        status = CheckStatus.SKIPPED if config.skip_unsupported else CheckStatus.FAILED
        result = CheckResult(name, status, f"not supported: {e}" if str(e) else "not supported")
    except _CheckFailed as e:
        result = CheckResult(name, CheckStatus.FAILED, str(e))
    except Exception as e:
        result = CheckResult(name, CheckStatus.FAILED, f"{type(e).__name__}: {e}")
    else:
        result = CheckResult(name, CheckStatus.PASSED, detail)

    logger.debug("Check %s %s %s", name, result.status.value, result.detail)
    return result


def _check_seed_deterministic(backend: AccountBackend) -> str:
    first = backend.private_key_from_seed(account_data.SEED)
    second = backend.private_key_from_seed(account_data.SEED)
    if first != second:
        raise _CheckFailed(
            f"Seed produced different keys: [{fingerprint(first)}] then [{fingerprint(second)}]"
        )
    return f"key [{fingerprint(first)}]"


def _check_seed_pinned(backend: AccountBackend) -> str:
    expected = account_data.BEACON_PRIVATE_KEY_STRING
    actual = backend.private_key_from_seed(account_data.SEED)
    if actual != expected:
        raise _CheckFailed(f"Expected key [{fingerprint(expected)}], got [{fingerprint(actual)}]")
    return f"key [{fingerprint(actual)}]"


def _check_view_key(backend: AccountBackend, account: AccountFixture) -> str:
    actual = backend.derive_view_key(account.private_key)
    if actual != account.view_key:
        raise _CheckFailed(
            f"Expected view key [{fingerprint(account.view_key)}], got [{fingerprint(actual)}]"
        )
    return f"view key [{fingerprint(actual)}]"


def _check_address(backend: AccountBackend, account: AccountFixture) -> str:
    actual = backend.derive_address(account.view_key)
    if actual != account.address:
        raise _CheckFailed(f"Expected address {account.address}, got {actual}")
    return actual


def _check_decrypts(backend: AccountBackend, key: str) -> str:
    actual = backend.decrypt_record(account_data.RECORD_CIPHERTEXT_STRING, key)
    if actual is None:
        raise _CheckFailed(f"Key [{fingerprint(key)}] could not decrypt its own record")
    if actual != account_data.RECORD_PLAINTEXT_STRING:
        raise _CheckFailed(f"Decrypted record differs from the expected plaintext: {actual!r}")
    return "plaintext matches"


def _check_rejected(backend: AccountBackend, ciphertext: str, key: str) -> str:
    try:
        actual = backend.decrypt_record(ciphertext, key)
    except (AleoTestkitError, ValueError) as e:
        return f"rejected: {type(e).__name__}: {e}"
    if actual is not None:
        raise _CheckFailed(f"Key [{fingerprint(key)}] decrypted a record it does not own")
    return "rejected"


def _check_program_parse(backend: AccountBackend) -> str:
    program = backend.parse_program(account_data.HELLO_PROGRAM)
    if program.id != account_data.HELLO_PROGRAM_ID:
        raise _CheckFailed(f"Expected program {account_data.HELLO_PROGRAM_ID}, got {program.id}")

    names = program.function_names()
    if names != [account_data.HELLO_PROGRAM_MAIN_FUNCTION]:
        raise _CheckFailed(f"Expected functions [{account_data.HELLO_PROGRAM_MAIN_FUNCTION}], got {names}")

    signature = program.function(account_data.HELLO_PROGRAM_MAIN_FUNCTION).signature()
    expected = (("u32.public", "u32.private"), ("u32.private",))
    if signature != expected:
        raise _CheckFailed(f"Expected signature {expected}, got {signature}")

    return f"{program.id}/{account_data.HELLO_PROGRAM_MAIN_FUNCTION}"


def _check_program_execute(backend: AccountBackend, config: ConformanceConfig) -> str:
    program = backend.parse_program(account_data.HELLO_PROGRAM)
    outputs = program.execute(account_data.HELLO_PROGRAM_MAIN_FUNCTION, list(config.program_inputs))
    rendered = [str(o) for o in outputs]
    if rendered != [config.expected_program_output]:
        raise _CheckFailed(f"Expected [{config.expected_program_output}], got {rendered}")

    return f"{', '.join(config.program_inputs)} -> {rendered[0]}"
