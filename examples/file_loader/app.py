"""File-based views -- the most common real-world pattern.

Loads pages, layouts and components from disk with FileSystemLoader and
wraps each page in a shared layout through its ``{{slot}}`` marker.

Run:
    python app.py
"""

from pathlib import Path

from monoview import DictConfig, Environment, FileSystemLoader

views_dir = Path(__file__).parent / "views"
env = Environment(
    loader=FileSystemLoader(views_dir),
    config=DictConfig({"APP_URL": "https://blog.test", "APP_PORT": ""}),
)

posts = [
    {"slug": "hello", "title": "Hello, world"},
    {"slug": "layouts", "title": "Layouts and slots"},
]

home_output = str(
    env.render(
        "pages/home",
        site_name="My Site",
        section="home",
        title="Welcome",
        posts=posts,
        count=len(posts),
    ).layout("layouts/app")
)

about_output = str(
    env.view(layout="layouts/app").render(
        "pages/about",
        site_name="My Site",
        section="about",
        title="About Us",
        description="Built with monoview directives.",
    )
)


def main() -> None:
    print("=== Home Page ===")
    print(home_output)
    print()
    print("=== About Page ===")
    print(about_output)


if __name__ == "__main__":
    main()
