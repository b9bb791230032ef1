"""
Relative color syntax.

    fn(from <base> c1 c2 c3 [/ alpha])
    color(from <base> <space> c1 c2 c3 [/ alpha])

The argument list is split into top-level tokens, every channel token is
turned into a small AST node, and the nodes are evaluated against the base
color seen through the target model. calc() bodies are compiled to postfix
with the shunting-yard algorithm and run on a numeric stack.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from .converters import ComponentConverter
from .converters.patterns import angle_to_deg
from .errors import GrammarError
from .registry import Registry
from .schemas.components import ALPHA, ComponentDefinition

logger = logging.getLogger(__name__)

RELATIVE_RE = re.compile(r"^([a-z][a-z0-9-]*)\(\s*from\s+(.*)\)$", re.IGNORECASE | re.DOTALL)
FUNCTION_ALIASES = {"rgba": "rgb", "hsla": "hsl"}

unsigned_num = r"(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?"
units = r"%|deg|grad|rad|turn"
LITERAL_RE = re.compile(f"^([+-]?{unsigned_num})({units})?$", re.IGNORECASE)
CALC_RE = re.compile(r"^calc\((.*)\)$", re.IGNORECASE | re.DOTALL)
CALC_TOKEN_RE = re.compile(
    f"\\s*(?:(?P<number>{unsigned_num})(?P<unit>{units})?|(?P<name>[a-z][a-z0-9_]*)|(?P<op>[-+*/()]))",
    re.IGNORECASE,
)

PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2, "neg": 3}


# AST ---------------------------------------------------------------


@dataclass(frozen=True)
class Number:
    value: float
    unit: Optional[str] = None


@dataclass(frozen=True)
class Percentage:
    value: float


@dataclass(frozen=True)
class ChannelRef:
    name: str


@dataclass(frozen=True)
class NoneKeyword:
    pass


@dataclass(frozen=True)
class Calc:
    source: str
    rpn: Tuple[Union[Number, Percentage, ChannelRef, str], ...]


Node = Union[Number, Percentage, ChannelRef, NoneKeyword, Calc]


@dataclass(frozen=True)
class RelativeColor:
    model: str
    base: str
    channels: Tuple[Node, ...]
    alpha: Optional[Node] = None


# Parsing -----------------------------------------------------------


def is_relative(text: str) -> bool:
    return RELATIVE_RE.match(text.strip()) is not None


def tokenize(text: str) -> List[str]:
    """
    Split on whitespace (and commas) outside parentheses. A top-level "/"
    becomes its own token.
    """
    tokens: List[str] = []
    buf: List[str] = []
    depth = 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise GrammarError(f"Unbalanced ')' in '{text}'")
        if depth == 0 and (ch.isspace() or ch in "/,"):
            if buf:
                tokens.append("".join(buf))
                buf = []
            if ch == "/":
                tokens.append("/")
            continue
        buf.append(ch)
    if depth != 0:
        raise GrammarError(f"Unbalanced '(' in '{text}'")
    if buf:
        tokens.append("".join(buf))
    return tokens


def parse_relative(text: str, registry: Registry) -> RelativeColor:
    """Parse relative color text into a RelativeColor, validating names and counts."""
    m = RELATIVE_RE.match(text.strip().lower())
    if not m:
        raise GrammarError(f"Expected 'fn(from <color> ...)': {text}")
    fname = FUNCTION_ALIASES.get(m.group(1), m.group(1))
    tokens = tokenize(m.group(2))
    if not tokens or tokens[0] == "/":
        raise GrammarError(f"Missing base color after 'from' in {text}")
    base = tokens.pop(0)

    if fname == "color":
        if not tokens or tokens[0] == "/":
            raise GrammarError(f"Missing color space after base color in {text}")
        model = tokens.pop(0)
        if model not in registry.spaces:
            raise GrammarError(f"Unknown color space '{model}' in {text}")
    else:
        model = fname
        if not isinstance(registry.formats.get(model), ComponentConverter):
            raise GrammarError(f"Unknown color function '{m.group(1)}' in {text}")
    converter = registry.get_model(model)

    if "/" in tokens:
        i = tokens.index("/")
        channel_tokens, alpha_tokens = tokens[:i], tokens[i + 1:]
        if len(alpha_tokens) != 1:
            raise GrammarError(f"Expected one alpha value after '/', got {len(alpha_tokens)} in {text}")
    else:
        channel_tokens, alpha_tokens = tokens, []
    if len(channel_tokens) != 3:
        raise GrammarError(
            f"Expected 3 channel values for {model}, got {len(channel_tokens)}: {' '.join(channel_tokens)}"
        )

    channels = tuple(parse_node(token, converter, text) for token in channel_tokens)
    alpha = parse_node(alpha_tokens[0], converter, text) if alpha_tokens else None
    return RelativeColor(model=model, base=base, channels=channels, alpha=alpha)


def relative_model(text: str, registry: Registry) -> str:
    return parse_relative(text, registry).model


def parse_node(token: str, converter: ComponentConverter, source: str) -> Node:
    if token == "none":
        return NoneKeyword()
    m = CALC_RE.match(token)
    if m:
        return Calc(token, tuple(compile_calc(m.group(1), converter, source)))
    m = LITERAL_RE.match(token)
    if m:
        value, unit = float(m.group(1)), m.group(2)
        if unit == "%":
            return Percentage(value)
        return Number(value, unit)
    if token in converter.components:
        return ChannelRef(token)
    raise GrammarError(f"Unknown token '{token}' in {source}")


def compile_calc(body: str, converter: ComponentConverter, source: str) -> List[Union[Number, Percentage, ChannelRef, str]]:
    """Shunting-yard: infix calc() body -> postfix list of operands and operators."""
    output: List[Union[Number, Percentage, ChannelRef, str]] = []
    stack: List[str] = []
    prev = None  # None, "operand", "op" or "("
    pos = 0
    while pos < len(body):
        m = CALC_TOKEN_RE.match(body, pos)
        if not m or m.end() == pos:
            if body[pos:].strip():
                raise GrammarError(f"Unexpected '{body[pos:].strip()}' in calc() of {source}")
            break
        pos = m.end()
        if m.group("number") is not None:
            value, unit = float(m.group("number")), m.group("unit")
            output.append(Percentage(value) if unit == "%" else Number(value, unit))
            prev = "operand"
        elif m.group("name") is not None:
            name = m.group("name").lower()
            if name == "calc" and body[pos:].lstrip().startswith("("):
                continue
            if name not in converter.components:
                raise GrammarError(f"Unknown channel '{name}' in calc() of {source}")
            output.append(ChannelRef(name))
            prev = "operand"
        else:
            op = m.group("op")
            if op == "(":
                stack.append(op)
                prev = "("
            elif op == ")":
                while stack and stack[-1] != "(":
                    output.append(stack.pop())
                if not stack:
                    raise GrammarError(f"Unbalanced ')' in calc() of {source}")
                stack.pop()
                prev = "operand"
            elif prev in (None, "op", "("):
                if op == "-":
                    stack.append("neg")
                elif op != "+":
                    raise GrammarError(f"Unexpected operator '{op}' in calc() of {source}")
                prev = "op"
            else:
                while stack and stack[-1] != "(" and PRECEDENCE[stack[-1]] >= PRECEDENCE[op]:
                    output.append(stack.pop())
                stack.append(op)
                prev = "op"
    if prev != "operand":
        raise GrammarError(f"Incomplete calc() expression in {source}")
    while stack:
        op = stack.pop()
        if op == "(":
            raise GrammarError(f"Unbalanced '(' in calc() of {source}")
        output.append(op)
    return output


# Evaluation --------------------------------------------------------


def _literal(node: Number) -> float:
    if node.unit:
        return angle_to_deg(f"{node.value}{node.unit}")
    return node.value


def evaluate_rpn(rpn, lookup: Callable[[str], float]) -> float:
    stack: List[float] = []
    for item in rpn:
        if isinstance(item, str):
            if len(stack) < (1 if item == "neg" else 2):
                raise GrammarError(f"Missing operand for '{item}' in calc()")
            if item == "neg":
                stack.append(-stack.pop())
                continue
            b = stack.pop()
            a = stack.pop()
            if item == "+":
                stack.append(a + b)
            elif item == "-":
                stack.append(a - b)
            elif item == "*":
                stack.append(a * b)
            else:
                stack.append(a / b if b != 0 else math.nan)
        elif isinstance(item, Percentage):
            stack.append(item.value / 100)
        elif isinstance(item, ChannelRef):
            stack.append(lookup(item.name))
        else:
            stack.append(_literal(item))
    if len(stack) != 1:
        raise GrammarError("Malformed calc() expression")
    return stack[0]


def evaluate(node: Node, channel: ComponentDefinition, lookup: Callable[[str], float]) -> float:
    """Value of one channel node in the target channel's units."""
    if isinstance(node, NoneKeyword):
        return 0.0
    if isinstance(node, Percentage):
        return channel.from_percent(node.value)
    if isinstance(node, ChannelRef):
        return lookup(node.name)
    if isinstance(node, Calc):
        return evaluate_rpn(node.rpn, lookup)
    return _literal(node)


def resolve_relative(text: str, registry: Registry):
    """Parse and evaluate relative color text into a Color."""
    from .color import Color

    expr = parse_relative(text, registry)
    base = Color.parse(expr.base, registry)
    converter = registry.get_model(expr.model)
    known = base.in_model(expr.model).get_components()

    values = [
        evaluate(node, converter.components[name], known.__getitem__)
        for node, name in zip(expr.channels, converter.channel_names)
    ]
    alpha = evaluate(expr.alpha, ALPHA, known.__getitem__) if expr.alpha is not None else base.alpha
    logger.debug("relative %s from %s -> %s", expr.model, expr.base, values + [alpha])
    return Color.from_xyza(converter.to_xyza(values + [alpha]), registry)
