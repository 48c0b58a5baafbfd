import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(help_text='Title of the event', max_length=250)),
                ('organizer', models.CharField(blank=True, default='', help_text='Organizer of the event', max_length=200)),
                ('city', models.CharField(blank=True, default='', help_text='City where the event takes place', max_length=200)),
                ('location', models.CharField(blank=True, default='', help_text='Venue of the event', max_length=200)),
                ('start_date', models.DateField(blank=True, help_text='First day of the event', null=True)),
                ('end_date', models.DateField(blank=True, help_text='Last day of the event', null=True)),
                ('stage', models.CharField(choices=[('planned', 'Planned'), ('consider', 'Consider'), ('attended', 'Attended'), ('cancelled', 'Cancelled')], default='planned', help_text='Lifecycle stage of the event', max_length=10)),
                ('booked', models.BooleanField(default=False, help_text='Whether tickets or a booth have already been booked')),
                ('cost_type', models.CharField(choices=[('participant', 'Per participant'), ('booth', 'Booth (flat)'), ('sponsoring', 'Sponsorship (flat)')], default='participant', help_text='How the cost value is to be interpreted', max_length=12)),
                ('cost_value', models.DecimalField(decimal_places=2, default=0, help_text='Price per participant or flat amount, depending on the cost type', max_digits=12, validators=[django.core.validators.MinValueValidator(0)])),
                ('colleagues', models.JSONField(blank=True, default=list, help_text='Names of the colleagues taking part')),
                ('tags', models.JSONField(blank=True, default=list, help_text='Free-text tags')),
                ('attachments', models.JSONField(blank=True, default=list, help_text='Links to attached files')),
                ('event_url', models.URLField(blank=True, default='', help_text='Website of the event')),
                ('notes', models.TextField(blank=True, default='', help_text='Internal notes')),
                ('visitor_notes', models.TextField(blank=True, default='', help_text='Notes from the colleagues who visited the event')),
                ('publication_status', models.BooleanField(default=False, help_text='Whether the event is published on the website')),
                ('linkedin_plan', models.BooleanField(default=False, editable=False, help_text='Whether a LinkedIn post is planned. Derived from the LinkedIn note.')),
                ('linkedin_note', models.TextField(blank=True, default='', help_text='Draft or idea for the LinkedIn post')),
                ('rating_sales', models.PositiveSmallIntegerField(blank=True, help_text='Rating from the sales perspective (1-5)', null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('rating_kam', models.PositiveSmallIntegerField(blank=True, help_text='Rating from the key account management perspective (1-5)', null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('rating_marketing', models.PositiveSmallIntegerField(blank=True, help_text='Rating from the marketing perspective (1-5)', null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('rating_clevel', models.PositiveSmallIntegerField(blank=True, help_text='Rating from the executive perspective (1-5)', null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('contact_name', models.CharField(blank=True, default='', help_text='Contact person at the organizer', max_length=200)),
                ('contact_email', models.EmailField(blank=True, default='', help_text='E-mail of the contact person', max_length=254)),
                ('contact_phone', models.CharField(blank=True, default='', help_text='Phone number of the contact person', max_length=50)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, help_text='When this event was added to the system')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='When this event was last modified')),
            ],
            options={
                'verbose_name': 'Event',
                'verbose_name_plural': 'Events',
                'ordering': ['start_date', 'title'],
                'indexes': [models.Index(fields=['start_date'], name='event_start_date_idx'), models.Index(fields=['organizer'], name='event_organizer_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('cost_value__gte', 0)), name='event_cost_value_non_negative')],
            },
        ),
        migrations.CreateModel(
            name='EventHistoryEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.TextField(help_text='Description of the change')),
                ('timestamp', models.DateTimeField(default=django.utils.timezone.now, help_text='When the change was recorded')),
                ('user_email', models.CharField(blank=True, default='', help_text='Who made the change, if known', max_length=200)),
                ('event', models.ForeignKey(help_text='Event this entry belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='history', to='events.event')),
            ],
            options={
                'verbose_name': 'History entry',
                'verbose_name_plural': 'History entries',
                'ordering': ['-timestamp', '-id'],
                'indexes': [models.Index(fields=['event', 'timestamp'], name='history_event_timestamp_idx')],
            },
        ),
    ]
