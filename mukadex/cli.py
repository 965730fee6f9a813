from __future__ import annotations
from typing import List, Optional
import argparse
import json
import logging
import sys

from .errors import ErrorReporter
from .printer import print_program
from .session import Session

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def read_source(path:str)->str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()

def dump_tokens(session:Session, source:str):
    for token in session.scan(source):
        print(json.dumps(token.to_dict()))

def run_file(session:Session, path:str, tokens:bool=False, ast:bool=False)->int:
    try:
        source=read_source(path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"mukadex: {path}: {e}", file=sys.stderr)
        return EX_NOINPUT
    if tokens:
        dump_tokens(session, source)
    elif ast:
        print(print_program(session.parse(source)))
    else:
        session.run(source)
    if session.reporter.had_error:
        return EX_DATAERR
    if session.reporter.had_runtime_error:
        return EX_SOFTWARE
    return EX_OK

def repl(session:Session):
    print("mukadex REPL. End each statement with ';'. Ctrl+D to exit.")
    while True:
        try:
            line=input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not line.strip():
            continue
        session.run(line+"\n")
        session.reporter.reset()

def main(argv:Optional[List[str]]=None)->int:
    p=argparse.ArgumentParser(prog="mukadex", description="Run mukadex programs.")
    p.add_argument("file", nargs="?", help="Path to the script to run.")
    p.add_argument("--repl", action="store_true", help="Start a REPL.")
    p.add_argument("--tokens", action="store_true", help="Print the token stream as JSON lines and exit.")
    p.add_argument("--ast", action="store_true", help="Print the parsed program and exit.")
    p.add_argument("--no-color", dest="color", action="store_false", help="Do not colorize diagnostics.")
    p.add_argument("--no-warnings", dest="warnings", action="store_false", help="Do not warn about unused locals.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log pipeline details to stderr.")
    try:
        args=p.parse_args(argv)
    except SystemExit as e:
        return EX_OK if e.code==0 else EX_USAGE

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    session=Session(reporter=ErrorReporter(color=args.color), warn_unused=args.warnings)
    try:
        if args.repl or not args.file:
            repl(session)
            return EX_OK
        return run_file(session, args.file, tokens=args.tokens, ast=args.ast)
    except Exception as e:
        print("Internal error:", e, file=sys.stderr)
        return EX_SOFTWARE
