"""Hello World -- the simplest monoview example.

Render template text straight from a string with a context mapping.
No views directory needed.

Run:
    python app.py
"""

from monoview import Environment

env = Environment()

source = "Hello, {{ name }}!"

output = env.render_string(source, {"name": "World"})


def main() -> None:
    print(output)
    print()

    # Same text, different contexts
    for name in ["Monoview", "Views", "Python"]:
        print(env.render_string(source, name=name))


if __name__ == "__main__":
    main()
