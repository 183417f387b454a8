"""Forms -- flash messages, validation errors and CSRF fields.

A tiny request cycle without a web framework: the first GET renders an
empty form, a bad POST stores validation errors and renders the form
again, and a good POST flashes a message that shows on the next page.
Settings come from the ``.env`` file next to this script.

Run:
    python app.py
"""

from pathlib import Path

from monoview import DictLoader, EnvConfig, Environment, ErrorBag, FlashStore, RotatingCsrfToken

here = Path(__file__).parent

loader = DictLoader(
    {
        "layouts/app": (
            "<html><body>"
            "@message('success')<div class=\"flash\">{{ message }}</div>@endmessage"
            "{{slot}}</body></html>"
        ),
        "pages/signup": (
            "<form method=\"post\" action=\"/signup\">@csrf()"
            "<input name=\"email\" value=\"{{ email }}\">"
            "<span class=\"error\">@errors('email')</span>"
            "<button>Sign up</button></form>"
        ),
        "pages/welcome": "<h1>Welcome, {{ email }}</h1>",
    }
)

# One set of stores per session
flash = FlashStore()
errors = ErrorBag()
csrf = RotatingCsrfToken(ttl=600)

env = Environment(
    loader=loader,
    config=EnvConfig(here / ".env", use_os_environ=False),
    flash=flash,
    errors=errors,
    csrf=csrf,
)


def validate(form: dict[str, str]) -> dict[str, list[str]]:
    problems: dict[str, list[str]] = {}
    email = form.get("email", "")
    if not email:
        problems.setdefault("email", []).append("The email field is required.")
    elif "@" not in email:
        problems.setdefault("email", []).append("The email must be a valid address.")
    return problems


def handle_post(form: dict[str, str]) -> str:
    if not csrf.validate(form.get("csrf_token", "")):
        return "403 Forbidden"
    problems = validate(form)
    if problems:
        errors.put(problems)
        return str(env.render("pages/signup", email=form.get("email", "")).layout("layouts/app"))
    flash.flash("success", "Account created.")
    return str(env.render("pages/welcome", email=form["email"]).layout("layouts/app"))


first_get = str(env.render("pages/signup", email="").layout("layouts/app"))
bad_post = handle_post({"email": "nope", "csrf_token": csrf.current()})
good_post = handle_post({"email": "ana@example.com", "csrf_token": csrf.current()})
forged_post = handle_post({"email": "ana@example.com", "csrf_token": "forged"})


def main() -> None:
    for title, html in [
        ("GET /signup", first_get),
        ("POST /signup (invalid)", bad_post),
        ("POST /signup (valid)", good_post),
        ("POST /signup (forged token)", forged_post),
    ]:
        print(f"=== {title} ===")
        print(html)
        print()


if __name__ == "__main__":
    main()
