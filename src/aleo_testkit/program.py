"""
Parser and local evaluator for a subset of Aleo instructions.

Supports programs made of imports, a program header, and functions with
typed inputs, arithmetic/logic instructions and typed outputs, such as:

    program hellothere.aleo;

    function hello:
        input r0 as u32.public;
        input r1 as u32.private;
        add r0 r1 into r2;
        output r2 as u32.private;
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .record import (
    Literal,
    Visibility,
    integer_bounds,
    make_literal,
    parse_literal,
    split_visibility,
)
from .types import (
    FIELD_MODULUS,
    INTEGER_TYPES,
    LITERAL_TYPES,
    ExecutionError,
    LiteralError,
    ProgramError,
    ProgramParseError,
)

logger = logging.getLogger(__name__)


PROGRAM_ID_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*\.aleo$")
FUNCTION_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
REGISTER_RE = re.compile(r"^r([0-9]+)$")

UNARY_OPCODES = frozenset({"not"})
BINARY_OPCODES = frozenset({
    "add", "add.w", "sub", "sub.w", "mul", "mul.w", "div", "div.w", "rem", "rem.w",
    "and", "or", "xor", "is.eq", "is.neq", "gt", "gte", "lt", "lte",
})


@dataclass(frozen=True)
class Register:
    """A numbered register, written r<N>."""
    index: int

    def __str__(self) -> str:
        return f"r{self.index}"


Operand = Union[Register, Literal]


@dataclass(frozen=True)
class ValueType:
    """A literal type with visibility, e.g. u32.public."""
    literal_type: str
    visibility: Visibility

    def __str__(self) -> str:
        return f"{self.literal_type}.{self.visibility.value}"


@dataclass(frozen=True)
class Input:
    """A function input bound to a register."""
    register: Register
    value_type: ValueType


@dataclass(frozen=True)
class Instruction:
    """An opcode applied to operands, stored into a destination register."""
    opcode: str
    operands: Tuple[Operand, ...]
    destination: Register

    def __str__(self) -> str:
        operands = " ".join(str(op) for op in self.operands)
        return f"{self.opcode} {operands} into {self.destination}"


@dataclass(frozen=True)
class Output:
    """A function output and its declared type."""
    operand: Operand
    value_type: ValueType


@dataclass
class Function:
    """A program function: inputs, instructions and outputs."""
    name: str
    inputs: List[Input] = field(default_factory=list)
    instructions: List[Instruction] = field(default_factory=list)
    outputs: List[Output] = field(default_factory=list)

    def signature(self) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
        """Declared (input types, output types), e.g. (("u32.public",), ("u32.private",))."""
        return (
            tuple(str(i.value_type) for i in self.inputs),
            tuple(str(o.value_type) for o in self.outputs),
        )


@dataclass
class Program:
    """A parsed program."""
    id: str
    imports: List[str] = field(default_factory=list)
    functions: Dict[str, Function] = field(default_factory=dict)

    def function(self, name: str) -> Function:
        """
        Look up a function by name.

        Raises:
            ProgramError: If the program has no such function
        """
        try:
            return self.functions[name]
        except KeyError:
            raise ProgramError(f"Function {name!r} not found in {self.id}")

    def contains_function(self, name: str) -> bool:
        return name in self.functions

    def function_names(self) -> List[str]:
        return list(self.functions)

    def execute(
        self,
        function_name: str,
        inputs: Sequence[Union[str, Literal]],
    ) -> List[Literal]:
        """
        Evaluate a function locally.

        Args:
            function_name: Name of the function to run
            inputs: Input values as literal strings ("3u32") or Literals

        Returns:
            The output values, in declaration order

        Raises:
            ExecutionError: If inputs do not match the signature or an
                instruction halts (overflow, division by zero)
        """
        function = self.function(function_name)
        logger.debug("Executing %s/%s with %d inputs", self.id, function.name, len(inputs))

        if len(inputs) != len(function.inputs):
            raise ExecutionError(
                f"{function.name} expects {len(function.inputs)} inputs, got {len(inputs)}"
            )

        registers: Dict[int, Literal] = {}
        for declared, value in zip(function.inputs, inputs):
            literal = _coerce_input(value)
            expected = declared.value_type.literal_type
            if literal.type != expected:
                raise ExecutionError(
                    f"Input {declared.register} expects {expected}, got {literal.type}"
                )
            registers[declared.register.index] = literal

        for instruction in function.instructions:
            operands = [_resolve(op, registers) for op in instruction.operands]
            registers[instruction.destination.index] = evaluate(instruction.opcode, operands)

        outputs = []
        for output in function.outputs:
            value = _resolve(output.operand, registers)
            if value.type != output.value_type.literal_type:
                raise ExecutionError(
                    f"Output {output.operand} is {value.type}, "
                    f"declared {output.value_type.literal_type}"
                )
            outputs.append(value)

        logger.debug("Executed %s/%s: %d outputs", self.id, function.name, len(outputs))
        return outputs


def parse_program(source: str) -> Program:
    """
    Parse program source text.

    One statement per line; "//" starts a comment.

    Raises:
        ProgramParseError: If the source is invalid (with the line number)
    """
    program: Optional[Program] = None
    imports: List[str] = []
    current: Optional[Function] = None
    next_register = 0

    for line_number, raw_line in enumerate(source.splitlines(), start=1):
        line = raw_line.split("//", 1)[0].strip()
        if not line:
            continue

        keyword = line.split(None, 1)[0]

        if keyword == "import":
            if program is not None:
                raise ProgramParseError("Imports must precede the program declaration", line_number)
            name = _statement_body(line, "import", line_number)
            if not PROGRAM_ID_RE.match(name):
                raise ProgramParseError(f"Invalid import: {name!r}", line_number)
            if name in imports:
                raise ProgramParseError(f"Duplicate import: {name}", line_number)
            imports.append(name)
            continue

        if keyword == "program":
            if program is not None:
                raise ProgramParseError("Duplicate program declaration", line_number)
            program_id = _statement_body(line, "program", line_number)
            if not PROGRAM_ID_RE.match(program_id):
                raise ProgramParseError(f"Invalid program id: {program_id!r}", line_number)
            program = Program(id=program_id, imports=list(imports))
            continue

        if program is None:
            raise ProgramParseError("Expected a program declaration", line_number)

        if keyword == "function":
            if not line.endswith(":"):
                raise ProgramParseError("Function declaration must end with ':'", line_number)
            name = line[len("function"):-1].strip()
            if not FUNCTION_NAME_RE.match(name):
                raise ProgramParseError(f"Invalid function name: {name!r}", line_number)
            if name in program.functions:
                raise ProgramParseError(f"Duplicate function: {name}", line_number)
            current = Function(name=name)
            program.functions[name] = current
            next_register = 0
            continue

        if current is None:
            raise ProgramParseError(f"Unexpected statement outside a function: {keyword}", line_number)

        if keyword == "input":
            if current.instructions or current.outputs:
                raise ProgramParseError("Inputs must precede instructions and outputs", line_number)
            register, value_type = _parse_typed_register(line, "input", line_number)
            if register.index != next_register:
                raise ProgramParseError(f"Expected register r{next_register}, got {register}", line_number)
            current.inputs.append(Input(register, value_type))
            next_register += 1
        elif keyword == "output":
            operand_text, value_type = _parse_typed(line, "output", line_number)
            operand = _parse_operand(operand_text, next_register, line_number)
            current.outputs.append(Output(operand, value_type))
        else:
            if current.outputs:
                raise ProgramParseError("Instructions must precede outputs", line_number)
            instruction = _parse_instruction(line, next_register, line_number)
            current.instructions.append(instruction)
            next_register += 1

    if program is None:
        raise ProgramParseError("Missing program declaration")
    if not program.functions:
        raise ProgramParseError(f"Program {program.id} declares no functions")

    logger.debug("Parsed %s with functions %s", program.id, program.function_names())
    return program


def _statement_body(line: str, keyword: str, line_number: int) -> str:
    if not line.endswith(";"):
        raise ProgramParseError(f"{keyword} statement must end with ';'", line_number)
    return line[len(keyword):-1].strip()


def _parse_typed(line: str, keyword: str, line_number: int) -> Tuple[str, ValueType]:
    parts = _statement_body(line, keyword, line_number).split()
    if len(parts) != 3 or parts[1] != "as":
        raise ProgramParseError(f"Expected '{keyword} <operand> as <type>.<visibility>;'", line_number)

    try:
        literal_type, visibility = split_visibility(parts[2])
    except LiteralError as e:
        raise ProgramParseError(str(e), line_number)
    if literal_type not in LITERAL_TYPES:
        raise ProgramParseError(f"Unsupported type: {literal_type}", line_number)

    return parts[0], ValueType(literal_type, visibility)


def _parse_typed_register(line: str, keyword: str, line_number: int) -> Tuple[Register, ValueType]:
    register_text, value_type = _parse_typed(line, keyword, line_number)
    match = REGISTER_RE.match(register_text)
    if match is None:
        raise ProgramParseError(f"Expected a register, got {register_text!r}", line_number)
    return Register(int(match.group(1))), value_type


def _parse_operand(text: str, next_register: int, line_number: int) -> Operand:
    match = REGISTER_RE.match(text)
    if match is not None:
        register = Register(int(match.group(1)))
        if register.index >= next_register:
            raise ProgramParseError(f"Register {register} is not defined", line_number)
        return register

    try:
        return parse_literal(text)
    except LiteralError as e:
        raise ProgramParseError(f"Invalid operand {text!r}: {e}", line_number)


def _parse_instruction(line: str, next_register: int, line_number: int) -> Instruction:
    if not line.endswith(";"):
        raise ProgramParseError("Instruction must end with ';'", line_number)

    tokens = line[:-1].split()
    opcode = tokens[0]
    if opcode in UNARY_OPCODES:
        arity = 1
    elif opcode in BINARY_OPCODES:
        arity = 2
    else:
        raise ProgramParseError(f"Unknown opcode: {opcode}", line_number)

    if len(tokens) != arity + 3 or tokens[-2] != "into":
        raise ProgramParseError(f"Expected '{opcode}' with {arity} operands and 'into <register>'", line_number)

    operands = tuple(_parse_operand(t, next_register, line_number) for t in tokens[1:1 + arity])

    match = REGISTER_RE.match(tokens[-1])
    if match is None:
        raise ProgramParseError(f"Expected a destination register, got {tokens[-1]!r}", line_number)
    destination = Register(int(match.group(1)))
    if destination.index != next_register:
        raise ProgramParseError(f"Expected register r{next_register}, got {destination}", line_number)

    return Instruction(opcode, operands, destination)


def _coerce_input(value: Union[str, Literal]) -> Literal:
    if isinstance(value, Literal):
        return value
    try:
        return parse_literal(value)
    except LiteralError as e:
        raise ExecutionError(f"Invalid input {value!r}: {e}")


def _resolve(operand: Operand, registers: Dict[int, Literal]) -> Literal:
    if isinstance(operand, Register):
        return registers[operand.index]
    return operand


def _wrap(value: int, type_name: str) -> int:
    bits, signed = INTEGER_TYPES[type_name]
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _checked(value: int, type_name: str, opcode: str) -> int:
    low, high = integer_bounds(type_name)
    if not low <= value <= high:
        raise ExecutionError(f"Integer overflow in '{opcode}' on {type_name}")
    return value


def _truncated_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def evaluate(opcode: str, operands: Sequence[Literal]) -> Literal:
    """
    Apply an opcode to literal operands.

    Raises:
        ExecutionError: On type mismatch, overflow or division by zero
    """
    if opcode == "not":
        (a,) = operands
        if a.type == "boolean":
            return Literal("boolean", not a.value)
        if a.type in INTEGER_TYPES:
            return Literal(a.type, _wrap(~a.value, a.type))
        raise ExecutionError(f"'not' is not defined for {a.type}")

    a, b = operands
    if a.type != b.type:
        raise ExecutionError(f"Operand types differ in '{opcode}': {a.type} and {b.type}")
    type_name = a.type

    if opcode == "is.eq":
        return Literal("boolean", a.value == b.value)
    if opcode == "is.neq":
        return Literal("boolean", a.value != b.value)

    if opcode in ("gt", "gte", "lt", "lte"):
        if type_name not in INTEGER_TYPES and type_name != "field":
            raise ExecutionError(f"'{opcode}' is not defined for {type_name}")
        result = {
            "gt": a.value > b.value,
            "gte": a.value >= b.value,
            "lt": a.value < b.value,
            "lte": a.value <= b.value,
        }[opcode]
        return Literal("boolean", result)

    if opcode in ("and", "or", "xor"):
        if type_name == "boolean":
            result = {"and": a.value and b.value, "or": a.value or b.value, "xor": a.value != b.value}[opcode]
            return Literal("boolean", result)
        if type_name in INTEGER_TYPES:
            result = {"and": a.value & b.value, "or": a.value | b.value, "xor": a.value ^ b.value}[opcode]
            return Literal(type_name, result)
        raise ExecutionError(f"'{opcode}' is not defined for {type_name}")

    wrapped = opcode.endswith(".w")
    base = opcode[:-2] if wrapped else opcode

    if type_name == "field":
        if wrapped or base == "rem":
            raise ExecutionError(f"'{opcode}' is not defined for field")
        return make_literal("field", _field_arithmetic(base, a.value, b.value))

    if type_name not in INTEGER_TYPES:
        raise ExecutionError(f"'{opcode}' is not defined for {type_name}")

    if base == "add":
        result = a.value + b.value
    elif base == "sub":
        result = a.value - b.value
    elif base == "mul":
        result = a.value * b.value
    elif base in ("div", "rem"):
        if b.value == 0:
            raise ExecutionError(f"Division by zero in '{opcode}'")
        quotient = _truncated_div(a.value, b.value)
        if base == "div":
            result = quotient
        else:
            # MIN rem -1 halts like MIN div -1 when checked
            if not wrapped:
                _checked(quotient, type_name, opcode)
            result = a.value - b.value * quotient
    else:
        raise ExecutionError(f"Unknown opcode: {opcode}")

    if wrapped:
        return Literal(type_name, _wrap(result, type_name))
    return Literal(type_name, _checked(result, type_name, opcode))


def _field_arithmetic(base: str, a: int, b: int) -> int:
    if base == "add":
        return (a + b) % FIELD_MODULUS
    if base == "sub":
        return (a - b) % FIELD_MODULUS
    if base == "mul":
        return (a * b) % FIELD_MODULUS
    if base == "div":
        if b == 0:
            raise ExecutionError("Division by zero in 'div'")
        return (a * pow(b, -1, FIELD_MODULUS)) % FIELD_MODULUS
    raise ExecutionError(f"Unknown opcode: {base}")
