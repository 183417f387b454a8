"""Reusable components -- parameters in, HTML out.

A component is a template under ``components/`` rendered with only the
parameters passed to ``@component``. Parent values reach a component by
substituting ``{{ name }}`` into its parameter object.

Run:
    python app.py
"""

from pathlib import Path

from monoview import Environment, FileSystemLoader

templates_dir = Path(__file__).parent / "templates"
env = Environment(loader=FileSystemLoader(templates_dir))

output = str(
    env.render(
        "pages/features",
        title="Component Demo",
        warning_message="This is an alpha release. API may change.",
        # Not passed to any component, so never rendered
        internal_note="do not show",
    )
)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
