"""Shared test fixtures and sample sources."""

from __future__ import annotations

import pytest

from afrafmt.dialect import PROPERTY, REBECA
from afrafmt.formatter import format_source
from afrafmt.lexer import tokenize
from afrafmt.tokens import Token, TokenType

PHILOSOPHERS = """\
reactiveclass Philosopher(5)
{
    knownrebecs { Fork forkL,forkR; }
    statevars {
        boolean eating ;
        int count;
    }

    Philosopher() {
        eating=false;
        self.arrive();
    }

    // try to pick up both forks
    msgsrv arrive() {
        if(!eating&&count<10){
            forkL.request()after(2);
        }
        else {
            count=count+1;
        }
    }
}

main {
    Fork f1():();
    Philosopher p1(f1,f2):(  );
}
"""

PHILOSOPHERS_FORMATTED = """\
reactiveclass Philosopher(5) {
    knownrebecs {
        Fork forkL, forkR;
    }
    statevars {
        boolean eating;
        int count;
    }
    Philosopher() {
        eating = false;
        self.arrive();
    }
    // try to pick up both forks
    msgsrv arrive() {
        if (!eating && count < 10) {
            forkL.request() after(2);
        } else {
            count = count + 1;
        }
    }
}
main {
    Fork f1():();
    Philosopher p1(f1, f2):();
}
"""

SAFETY_PROPERTY = """\
property {
  define {
    p0 = node.x>0;
    p1=node.y  ==  -1;
  }
  /* invariants
   * checked by the model checker
   */
  Assertion{
    Safety:p0&&!p1;
  }
  LTL {
    Live:G(F(p0));
  }
}
"""

SAFETY_PROPERTY_FORMATTED = """\
property {
  define {
    p0 = node.x > 0;
    p1 = node.y == -1;
  }
  /* invariants
   * checked by the model checker
   */
  Assertion {
    Safety: p0 && !p1;
  }
  LTL {
    Live: G(F(p0));
  }
}
"""

# Awkward inputs: unterminated literals, stray characters, odd nesting
MALFORMED = [
    "",
    "}}}{",
    "x = \"unterminated",
    "c = '\\'",
    "/* never closed\n  * still going",
    "a ## b @@ ?: `q`",
    "\r\n\r\n x;\r y;",
    "if(a){b;}}}else{c;",
    "for(;;){}",
    "a=b--c+++d;",
]


@pytest.fixture
def lex():
    """Return a helper that tokenizes source in the Rebeca dialect (or another)."""

    def _lex(source: str, dialect=REBECA) -> list[Token]:
        return tokenize(source, dialect)

    return _lex


@pytest.fixture
def fmt():
    """Return a helper that formats Rebeca source."""

    def _fmt(source: str, **kwargs) -> str:
        return format_source(source, REBECA, **kwargs)

    return _fmt


@pytest.fixture
def prop_fmt():
    """Return a helper that formats property source."""

    def _fmt(source: str, **kwargs) -> str:
        return format_source(source, PROPERTY, **kwargs)

    return _fmt


@pytest.fixture
def types():
    """Return a helper that maps tokens to their types."""

    def _types(tokens: list[Token]) -> list[TokenType]:
        return [t.type for t in tokens]

    return _types
