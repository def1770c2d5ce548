import json

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from rail_admin_meta.decorators.model_decorator import ModelDecorator

VIEWS = ("index", "show", "form")


class Command(BaseCommand):
    help = "Print the index, show and form field lists of a model."

    def add_arguments(self, parser):
        parser.add_argument("model", help="Model label, e.g. 'blog.Article'.")
        parser.add_argument(
            "--view",
            choices=VIEWS,
            action="append",
            default=None,
            help="Only print the given view (repeatable; default: all).",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            default=False,
            help="Emit the field lists as JSON.",
        )

    def handle(self, *args, **options):
        try:
            model = apps.get_model(options["model"])
        except (LookupError, ValueError) as exc:
            raise CommandError(f"Unknown model '{options['model']}': {exc}")

        decorator = ModelDecorator(model)
        views = options.get("view") or list(VIEWS)
        lists = {view: list(getattr(decorator, f"{view}_field_names")) for view in views}

        if not decorator.fields:
            self.stderr.write(
                self.style.WARNING(
                    f"No fields for {decorator.model_label}: its table does not "
                    "exist yet or the database is unreachable."
                )
            )

        if options.get("json"):
            payload = {
                "model": decorator.model_label,
                "primary_key": decorator.primary_key,
                **{f"{view}_field_names": names for view, names in lists.items()},
            }
            self.stdout.write(json.dumps(payload, indent=2))
            return

        self.stdout.write(self.style.SUCCESS(decorator.model_label))
        self.stdout.write(f"primary key: {decorator.primary_key}")
        for view, names in lists.items():
            self.stdout.write(f"{view}: {', '.join(names) or '-'}")
