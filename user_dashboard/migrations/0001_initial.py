from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='KycRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('pending_review', 'Pending Review'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending_review', max_length=30)),
                ('document_type', models.CharField(choices=[('bvn', 'BVN'), ('national_id', 'National ID (NIN)'), ('passport', 'International Passport'), ('drivers_license', "Driver's License")], max_length=30)),
                ('document_value', models.CharField(help_text='BVN, NIN, passport or licence number as entered', max_length=50)),
                ('document_file', models.FileField(blank=True, help_text='ID document image or PDF', upload_to='kyc/documents/%Y/%m/')),
                ('selfie_file', models.ImageField(blank=True, help_text='Selfie used for face match', upload_to='kyc/selfies/%Y/%m/')),
                ('smile_id_job_id', models.CharField(blank=True, max_length=100)),
                ('result', models.JSONField(blank=True, help_text='Raw verification result returned by the provider', null=True)),
                ('rejection_reason', models.TextField(blank=True, null=True)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('reviewed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='kyc_reviews', to=settings.AUTH_USER_MODEL)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='kyc_requests', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'KYC Request',
                'verbose_name_plural': 'KYC Requests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='kycrequest_status_idx'),
                    models.Index(fields=['user', '-created_at'], name='kycrequest_user_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='KycAuditLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('submitted', 'Submitted'), ('approved', 'Approved'), ('rejected', 'Rejected')], max_length=30)),
                ('notes', models.TextField(blank=True)),
                ('ip_address', models.GenericIPAddressField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('kyc_request', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='audit_logs', to='user_dashboard.kycrequest')),
                ('performed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'KYC Audit Log',
                'verbose_name_plural': 'KYC Audit Logs',
                'ordering': ['-created_at'],
            },
        ),
    ]
