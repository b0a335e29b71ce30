'''
utest is a tiny unit testing library.
Test scripts call the `utest_*` functions at module level.
Each failure is described on stderr as it occurs; at exit, a summary is printed and the process status is set to 1.
'''

import atexit as _atexit
from inspect import getframeinfo as _getframeinfo, stack as _stack
from os.path import relpath as _rel_path
from sys import stderr as _stderr
from traceback import print_exception as _print_exception
from typing import Any, Callable, Iterable, TypeVar


__all__ = [
  'utest',
  'utest_call',
  'utest_exc',
  'utest_seq',
  'utest_val',
]


_counts = {'tests': 0, 'failures': 0}


_C = TypeVar('_C', bound=Callable)

def utest_call(fn:_C) -> _C:
  'Decorator that calls the decorated test function immediately, so that test state stays local to it.'
  fn()
  return fn


def utest(exp:Any, fn:Callable, *args:Any, _exit=False, **kwargs:Any) -> None:
  'Call `fn(*args, **kwargs)`; fail if it raises or returns a value not equal to `exp`.'
  ok, ret = _call(fn, args, kwargs)
  if not ok:
    _fail(fn, args, kwargs, 'value', exp, raised=ret)
    if _exit: raise ret
  elif ret != exp:
    _fail(fn, args, kwargs, 'value', exp, returned=ret)


def utest_exc(exp_exc:Any, fn:Callable, *args:Any, _exit=False, **kwargs:Any) -> None:
  '''
  Call `fn(*args, **kwargs)`; fail if it returns, or raises an exception that does not match `exp_exc`.
  `exp_exc` is matched against the raised exception as follows:
  * a string is compared to the repr of the exception;
  * a type is tested with isinstance;
  * an exception instance matches an exception of the same type with equal args.
  '''
  ok, ret = _call(fn, args, kwargs)
  if ok:
    _fail(fn, args, kwargs, 'exception', exp_exc, returned=ret)
  elif not _exc_matches(exp_exc, ret):
    _fail(fn, args, kwargs, 'exception', exp_exc, raised=ret)
    if _exit: raise ret


def utest_seq(exp_seq:Iterable[Any], fn:Callable, *args:Any, _exit=False, **kwargs:Any) -> None:
  'Call `fn(*args, **kwargs)` and compare the items of the returned iterable to those of `exp_seq`.'
  exp = list(exp_seq)
  ok, ret = _call(lambda *a, **k: list(fn(*a, **k)), args, kwargs)
  if not ok:
    _fail(fn, args, kwargs, 'sequence', exp, raised=ret)
    if _exit: raise ret
  elif ret != exp:
    _fail(fn, args, kwargs, 'sequence', exp, returned=ret)


def utest_val(exp_val:Any, act_val:Any, desc='<value>') -> None:
  'Fail if `act_val` does not equal `exp_val`; `desc` labels the failure.'
  _counts['tests'] += 1
  if act_val != exp_val:
    _fail(repr(desc), (), {}, 'value', exp_val, returned=act_val)


def _call(fn:Callable, args:tuple, kwargs:dict) -> tuple[bool,Any]:
  _counts['tests'] += 1
  try: return True, fn(*args, **kwargs)
  except BaseException as exc: return False, exc


def _exc_matches(exp:Any, act:BaseException) -> bool:
  if isinstance(exp, str): return exp == repr(act)
  if isinstance(exp, type): return isinstance(act, exp)
  return type(exp) is type(act) and exp.args == act.args


_no_value = object()

def _fail(subj:Any, args:tuple, kwargs:dict, exp_label:str, exp:Any, returned:Any=_no_value, raised:Any=None) -> None:
  _counts['failures'] += 1

  # Find the first frame outside of this module, which is the test script line.
  frame = next(f for f in _stack() if f.filename != __file__)
  info = _getframeinfo(frame[0])
  path = _rel_path(info.filename)
  if '/' not in path: path = './' + path
  name = getattr(subj, '__qualname__', str(subj))
  _errL(f'\n{path}:{info.lineno}: utest failure: {name}')

  for i, arg in enumerate(args): _errL(f'  arg {i} = {arg!r}')
  for key, arg in kwargs.items(): _errL(f'  arg {key} = {arg!r}')

  if raised is not None:
    act_label = 'raised exception:'
    act = raised
  else:
    act_label = f'returned {exp_label}:'
    act = returned
  exp_label = f'expected {exp_label}:'
  width = max(len(exp_label), len(act_label))
  _errL(f'  {exp_label:{width}} {exp!r}')
  _errL(f'  {act_label:{width}} {act!r}')
  if raised is not None:
    for i, arg in enumerate(raised.args): _errL(f'    exc arg {i}: {arg!r}')
    _errL()
    _print_exception(raised, file=_stderr)
  _errL()


def _errL(*items:Any) -> None: print(*items, sep='', file=_stderr)


@_atexit.register
def report() -> None:
  'At exit, if any test failed, print a summary and force the process status to 1.'
  from os import _exit
  if _counts['failures']:
    _errL(f'\nutest ran: {_counts["tests"]}; failed: {_counts["failures"]}')
    _stderr.flush()
    _exit(1) # Raising SystemExit has no effect in an atexit handler.
