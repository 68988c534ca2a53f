"""JSON serialization/deserialization for the linebasic AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Program lines are stored as a
list of ``{"line": N, "statement": ...}`` entries in execution order, and
literal values carry their kind so that ``"5"`` and ``5`` stay distinct.
I/O sinks attached to PRINT and INPUT statements are not serialized.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    Assignment,
    Print,
    Input,
    Goto,
    If,
    For,
    Next,
    End,
    Remark,
    Literal,
    Variable,
    Binary,
    Comparison,
    Parentheses,
    FunctionCall,
)
from .types import Value, NUMERIC, TEXT


def value_to_obj(v: Value) -> Dict[str, Any]:
    if v.is_numeric:
        return {"kind": NUMERIC, "number": v.number}
    return {"kind": TEXT, "text": v.text}


def value_from_obj(o: Dict[str, Any]) -> Value:
    if o["kind"] == NUMERIC:
        return Value.numeric(o["number"])
    if o["kind"] == TEXT:
        return Value.string(o["text"])
    raise ValueError(f"Unknown value kind: {o['kind']}")


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {
            "type": "Program",
            "lines": [{"line": n, "statement": ast_to_obj(s)} for n, s in node.statements()],
        }

    # Statements
    if isinstance(node, Assignment):
        return {"type": "Assignment", "variable": node.variable, "expr": ast_to_obj(node.expr)}
    if isinstance(node, Print):
        return {"type": "Print", "expressions": [ast_to_obj(e) for e in node.expressions]}
    if isinstance(node, Input):
        return {"type": "Input", "variable": node.variable, "prompt": node.prompt}
    if isinstance(node, Goto):
        return {"type": "Goto", "target_line": node.target_line}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_statement": ast_to_obj(node.then_statement),
        }
    if isinstance(node, For):
        return {
            "type": "For",
            "variable": node.variable,
            "start": ast_to_obj(node.start),
            "end": ast_to_obj(node.end),
            "step": ast_to_obj(node.step),
            "line_num": node.line_num,
        }
    if isinstance(node, Next):
        return {"type": "Next", "variable": node.variable}
    if isinstance(node, End):
        return {"type": "End"}
    if isinstance(node, Remark):
        return {"type": "Remark", "text": node.text}

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "value": value_to_obj(node.value)}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": node.name}
    if isinstance(node, Binary):
        return {"type": "Binary", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Comparison):
        return {"type": "Comparison", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Parentheses):
        return {"type": "Parentheses", "expr": ast_to_obj(node.expr)}
    if isinstance(node, FunctionCall):
        return {"type": "FunctionCall", "name": node.name, "args": [ast_to_obj(a) for a in node.args]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        program = Program()
        for entry in obj["lines"]:
            line = int(entry["line"])
            program.lines[line] = ast_from_obj(entry["statement"])
            program.order.append(line)
        program.order.sort()
        return program
    if t == "Assignment":
        return Assignment(variable=obj["variable"], expr=ast_from_obj(obj["expr"]))
    if t == "Print":
        return Print(expressions=[ast_from_obj(e) for e in obj["expressions"]])
    if t == "Input":
        return Input(variable=obj["variable"], prompt=obj.get("prompt", ""))
    if t == "Goto":
        return Goto(target_line=int(obj["target_line"]))
    if t == "If":
        return If(condition=ast_from_obj(obj["condition"]), then_statement=ast_from_obj(obj["then_statement"]))
    if t == "For":
        return For(
            variable=obj["variable"],
            start=ast_from_obj(obj["start"]),
            end=ast_from_obj(obj["end"]),
            step=ast_from_obj(obj["step"]),
            line_num=int(obj.get("line_num", 0)),
        )
    if t == "Next":
        return Next(variable=obj.get("variable", ""))
    if t == "End":
        return End()
    if t == "Remark":
        return Remark(text=obj.get("text", ""))
    if t == "Literal":
        return Literal(value=value_from_obj(obj["value"]))
    if t == "Variable":
        return Variable(name=obj["name"])
    if t == "Binary":
        return Binary(left=ast_from_obj(obj["left"]), op=obj["op"], right=ast_from_obj(obj["right"]))
    if t == "Comparison":
        return Comparison(left=ast_from_obj(obj["left"]), op=obj["op"], right=ast_from_obj(obj["right"]))
    if t == "Parentheses":
        return Parentheses(expr=ast_from_obj(obj["expr"]))
    if t == "FunctionCall":
        return FunctionCall(name=obj["name"], args=[ast_from_obj(a) for a in obj["args"]])

    raise ValueError(f"Unknown AST node type: {t}")


def program_to_obj(program: Program) -> Dict[str, Any]:
    return ast_to_obj(program)


def program_from_obj(obj: Dict[str, Any]) -> Program:
    program = ast_from_obj(obj)
    if not isinstance(program, Program):
        raise ValueError("AST JSON does not describe a program")
    return program
