import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("projects", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ActivityLogEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("task_created", "Task created"),
                            ("task_updated", "Task updated"),
                            ("task_completed", "Task completed"),
                            ("member_added", "Member added"),
                            ("member_removed", "Member removed"),
                            ("poll_created", "Poll created"),
                            ("whiteboard_updated", "Whiteboard updated"),
                            ("file_uploaded", "File uploaded"),
                        ],
                        db_index=True,
                        max_length=32,
                    ),
                ),
                ("target_entity", models.CharField(max_length=64)),
                ("details", models.TextField(blank=True)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "actor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activities",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activity",
                        to="projects.project",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "Activity log entries",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["project", "-created_at"], name="activity_project_time_idx"),
                    models.Index(fields=["actor", "-created_at"], name="activity_actor_time_idx"),
                ],
            },
        ),
    ]
