"""Tint & shade palette generator (Flask).

Blends a base colour toward a target colour in N steps on a geometric
ratio curve, ratio(i) = 1 - (0.05 ** (1 / (N - 1))) ** i, so the first
swatch is the base itself and the last one stops 5 % short of the target.
Steps are wide near the base and compress toward the target.

Usage
-----
$ pip install -e .
$ python main.py                # starts on http://127.0.0.1:5000

The root path serves the page; each click on "Generate" calls
/generate?base=RRGGBB&target=RRGGBB&n=N and renders the JSON it returns.
Settings can be overridden with COLOR_TINT_* environment variables
(e.g. COLOR_TINT_MAX_COUNT=64).
"""

from color_tint.app import create_app

if __name__ == "__main__":
    # Production: debug=False; threaded=True is fine, the palette maths is pure.
    create_app().run(debug=False, threaded=True)
