"""
The primitive namespace: literal types and the signatures of primitive operators.
"""
from typing import Optional
from .calculus import NUM, BOOL, STR, VOID, ProcType, TypeVariable, TExp

literal_type_map = {
	bool: BOOL,
	int: NUM,
	float: NUM,
	str: STR,
}

def literal_type(value) -> Optional[TExp]:
	# Dispatch on the exact class: bool is a subclass of int.
	return literal_type_map.get(type(value))

_monomorphic: dict[str, ProcType] = {}
_generic: dict[str, tuple[tuple[str, ...], TExp]] = {}

def _install(ops:str, signature:ProcType):
	for op in ops.split(): _monomorphic[op] = signature

def _install_generic(ops:str, params:tuple[str, ...], result:TExp):
	for op in ops.split(): _generic[op] = params, result

def _bin_op(src, dst): return ProcType((src, src), dst)

_install("+ - * /", _bin_op(NUM, NUM))
_install("> < =", _bin_op(NUM, BOOL))
_install("and or", _bin_op(BOOL, BOOL))
_install("not", ProcType((BOOL,), BOOL))
_install("newline", ProcType((), VOID))
_install_generic("number? boolean? string? list? pair? symbol?", ("T",), BOOL)
_install_generic("eq? string=?", ("T1", "T2"), BOOL)
_install_generic("display", ("T",), VOID)

def signature(op:str, site=None) -> Optional[ProcType]:
	"""
	The signature for one occurrence of a primitive, or None if there's no such primitive.
	Generic signatures get type variables qualified by the site, which prevents
	accidental capture between independent call sites.
	"""
	if op in _monomorphic:
		return _monomorphic[op]
	if op in _generic:
		params, result = _generic[op]
		return ProcType([TypeVariable(p, site) for p in params], result)
	return None
