__version__ = "0.1.0"


def __getattr__(name):
    import importlib

    _name_to_module = {
        "tokenize": ".tokenizer",
        "parse": ".parser",
        "parse_tokens": ".parser",
        "evaluate": ".evaluator",
        "create_evaluator": ".evaluator",
        "get_filter_func": ".evaluator",
        "identifier": "._models",
        "and_": "._models",
        "or_": "._models",
        "not_": "._models",
        "Token": "._models",
        "Expression": "._models",
        "IdentifierExpression": "._models",
        "AndExpression": "._models",
        "OrExpression": "._models",
        "NotExpression": "._models",
        "expression_to_json": "._models",
        "expression_from_json": "._models",
        "expression_depth": "._models",
        "TokenType": "._enums",
        "ExpressionType": "._enums",
        "ExpressionError": ".errors",
        "TokenizerError": ".errors",
        "ParseError": ".errors",
        "ExpressionDepthError": ".errors",
    }
    if name in _name_to_module:
        mod = importlib.import_module(_name_to_module[name], __name__)
        attr = getattr(mod, name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
