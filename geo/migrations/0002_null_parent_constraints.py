# Путь: backend/geo/migrations/0002_null_parent_constraints.py
# Назначение: Уникальность slug и имени для записей без родителя (NULL в составном индексе не сравнивается).

import django.db.models.functions.text
from django.db import migrations, models


def _pair(model, parent):
    return [
        migrations.AddConstraint(
            model_name=model,
            constraint=models.UniqueConstraint(
                condition=models.Q((f"{parent}__isnull", True)),
                fields=("slug",),
                name=f"geo_{model}_slug_no_{parent}_uniq",
            ),
        ),
        migrations.AddConstraint(
            model_name=model,
            constraint=models.UniqueConstraint(
                django.db.models.functions.text.Lower("name"),
                condition=models.Q((f"{parent}__isnull", True)),
                name=f"geo_{model}_name_no_{parent}_uniq",
            ),
        ),
    ]


class Migration(migrations.Migration):

    dependencies = [
        ("geo", "0001_initial"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="state",
            constraint=models.UniqueConstraint(
                django.db.models.functions.text.Lower("name"),
                condition=models.Q(("country__isnull", True)),
                name="geo_state_name_no_country_uniq",
            ),
        ),
        *_pair("city", "state"),
        *_pair("area", "city"),
        *_pair("location", "city"),
    ]
