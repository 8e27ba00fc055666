import uuid

import django.db.models.deletion
from django.db import migrations, models


STATUS_CHOICES = [
    ('RECEIVED', 'Received'),
    ('IN_DIAGNOSIS', 'In diagnosis'),
    ('AWAITING_APPROVAL', 'Awaiting approval'),
    ('APPROVED', 'Approved'),
    ('IN_PROGRESS', 'In progress'),
    ('AWAITING_PARTS', 'Awaiting parts'),
    ('COMPLETED', 'Completed'),
    ('DELIVERED', 'Delivered'),
    ('CANCELLED', 'Cancelled'),
]

LINE_STATUS_CHOICES = [
    ('PENDING', 'Pending'),
    ('IN_PROGRESS', 'In progress'),
    ('COMPLETED', 'Completed'),
    ('CANCELLED', 'Cancelled'),
]


def base_fields():
    return [
        ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
        ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
        ('version', models.PositiveIntegerField(default=1, verbose_name='Version')),
        ('created_by', models.CharField(blank=True, max_length=150, null=True, verbose_name='Created by')),
        ('updated_by', models.CharField(blank=True, max_length=150, null=True, verbose_name='Updated by')),
        ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, verbose_name='ID')),
    ]


def active_fields():
    return base_fields() + [
        ('is_active', models.BooleanField(db_index=True, default=True, verbose_name='Active')),
    ]


def line_fields():
    return [
        ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
        ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
        ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ('quantity', models.PositiveIntegerField(default=1, verbose_name='Quantity')),
        ('unit_price', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='Unit price')),
        ('total_price', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='Total price')),
        ('status', models.CharField(choices=LINE_STATUS_CHOICES, default='PENDING', max_length=20, verbose_name='Status')),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='CustomerModel',
            fields=active_fields() + [
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('document_type', models.CharField(choices=[('CPF', 'CPF'), ('CNPJ', 'CNPJ')], max_length=4, verbose_name='Document type')),
                ('document', models.CharField(max_length=14, unique=True, verbose_name='Document')),
                ('email', models.EmailField(max_length=254, unique=True, verbose_name='Email')),
                ('phone', models.CharField(max_length=20, verbose_name='Phone')),
                ('address', models.CharField(blank=True, max_length=255, null=True, verbose_name='Address')),
                ('city', models.CharField(blank=True, max_length=100, null=True, verbose_name='City')),
                ('state', models.CharField(blank=True, max_length=50, null=True, verbose_name='State')),
                ('zip_code', models.CharField(blank=True, max_length=10, null=True, verbose_name='ZIP code')),
            ],
            options={
                'verbose_name': 'Customer',
                'verbose_name_plural': 'Customers',
                'db_table': 'customers',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='VehicleModel',
            fields=active_fields() + [
                ('license_plate', models.CharField(max_length=7, unique=True, verbose_name='License plate')),
                ('brand', models.CharField(max_length=100, verbose_name='Brand')),
                ('model', models.CharField(max_length=100, verbose_name='Model')),
                ('year', models.PositiveIntegerField(verbose_name='Year')),
                ('color', models.CharField(blank=True, max_length=50, null=True, verbose_name='Color')),
                ('chassis_number', models.CharField(blank=True, max_length=50, null=True, verbose_name='Chassis number')),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='vehicles', to='persistence.customermodel', verbose_name='Customer')),
            ],
            options={
                'verbose_name': 'Vehicle',
                'verbose_name_plural': 'Vehicles',
                'db_table': 'vehicles',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='ServiceModel',
            fields=active_fields() + [
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('description', models.TextField(blank=True, null=True, verbose_name='Description')),
                ('estimated_duration', models.PositiveIntegerField(verbose_name='Estimated duration (minutes)')),
                ('price', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='Price')),
                ('category', models.CharField(choices=[('MAINTENANCE', 'Maintenance'), ('REPAIR', 'Repair'), ('INSPECTION', 'Inspection'), ('DIAGNOSTICS', 'Diagnostics'), ('ALIGNMENT', 'Alignment'), ('BALANCING', 'Balancing'), ('ELECTRICAL', 'Electrical'), ('BODYWORK', 'Bodywork'), ('PAINTING', 'Painting'), ('OTHER', 'Other')], db_index=True, default='OTHER', max_length=20, verbose_name='Category')),
            ],
            options={
                'verbose_name': 'Service',
                'verbose_name_plural': 'Services',
                'db_table': 'services',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='PartModel',
            fields=active_fields() + [
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('description', models.TextField(blank=True, null=True, verbose_name='Description')),
                ('part_number', models.CharField(max_length=50, unique=True, verbose_name='Part number')),
                ('manufacturer', models.CharField(blank=True, max_length=100, null=True, verbose_name='Manufacturer')),
                ('price', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='Price')),
                ('stock_quantity', models.PositiveIntegerField(default=0, verbose_name='Stock quantity')),
                ('min_stock_level', models.PositiveIntegerField(default=5, verbose_name='Minimum stock level')),
                ('unit', models.CharField(default='un', max_length=10, verbose_name='Unit')),
            ],
            options={
                'verbose_name': 'Part',
                'verbose_name_plural': 'Parts',
                'db_table': 'parts',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='OrderNumberSequence',
            fields=[
                ('key', models.CharField(max_length=50, primary_key=True, serialize=False, verbose_name='Key')),
                ('last_value', models.PositiveBigIntegerField(default=0, verbose_name='Last value')),
            ],
            options={
                'verbose_name': 'Order number sequence',
                'verbose_name_plural': 'Order number sequences',
                'db_table': 'order_number_sequences',
            },
        ),
        migrations.CreateModel(
            name='ServiceOrderModel',
            fields=base_fields() + [
                ('order_number', models.CharField(max_length=20, unique=True, verbose_name='Order number')),
                ('status', models.CharField(choices=STATUS_CHOICES, db_index=True, default='RECEIVED', max_length=20, verbose_name='Status')),
                ('priority', models.CharField(choices=[('LOW', 'Low'), ('NORMAL', 'Normal'), ('HIGH', 'High'), ('URGENT', 'Urgent')], default='NORMAL', max_length=10, verbose_name='Priority')),
                ('description', models.TextField(verbose_name='Description')),
                ('diagnosis', models.TextField(blank=True, null=True, verbose_name='Diagnosis')),
                ('observations', models.TextField(blank=True, null=True, verbose_name='Observations')),
                ('estimated_completion', models.DateTimeField(blank=True, null=True, verbose_name='Estimated completion')),
                ('actual_completion', models.DateTimeField(blank=True, null=True, verbose_name='Actual completion')),
                ('total_amount', models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name='Total amount')),
                ('approved_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name='Approved amount')),
                ('approved_at', models.DateTimeField(blank=True, null=True, verbose_name='Approved at')),
                ('approved_by', models.CharField(blank=True, max_length=150, null=True, verbose_name='Approved by')),
                ('assigned_to', models.CharField(blank=True, max_length=150, null=True, verbose_name='Assigned to')),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='service_orders', to='persistence.customermodel', verbose_name='Customer')),
                ('vehicle', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='service_orders', to='persistence.vehiclemodel', verbose_name='Vehicle')),
            ],
            options={
                'verbose_name': 'Service order',
                'verbose_name_plural': 'Service orders',
                'db_table': 'service_orders',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['customer', 'created_at'], name='service_ord_custome_3f1a2b_idx'),
                    models.Index(fields=['vehicle', 'created_at'], name='service_ord_vehicle_8c4d5e_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ServiceOrderItemModel',
            fields=line_fields() + [
                ('service_order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='service_items', to='persistence.serviceordermodel', verbose_name='Service order')),
                ('service', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='order_items', to='persistence.servicemodel', verbose_name='Service')),
            ],
            options={
                'verbose_name': 'Service order item',
                'verbose_name_plural': 'Service order items',
                'db_table': 'service_order_items',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='PartOrderItemModel',
            fields=line_fields() + [
                ('service_order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='part_items', to='persistence.serviceordermodel', verbose_name='Service order')),
                ('part', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='order_items', to='persistence.partmodel', verbose_name='Part')),
            ],
            options={
                'verbose_name': 'Part order item',
                'verbose_name_plural': 'Part order items',
                'db_table': 'part_order_items',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='ServiceOrderStatusHistoryModel',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('previous_status', models.CharField(blank=True, choices=STATUS_CHOICES, max_length=20, null=True, verbose_name='Previous status')),
                ('new_status', models.CharField(choices=STATUS_CHOICES, max_length=20, verbose_name='New status')),
                ('changed_by', models.CharField(blank=True, max_length=150, null=True, verbose_name='Changed by')),
                ('reason', models.TextField(blank=True, null=True, verbose_name='Reason')),
                ('changed_at', models.DateTimeField(db_index=True, verbose_name='Changed at')),
                ('service_order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='status_history', to='persistence.serviceordermodel', verbose_name='Service order')),
            ],
            options={
                'verbose_name': 'Status change',
                'verbose_name_plural': 'Status history',
                'db_table': 'service_order_status_history',
                'ordering': ['changed_at'],
            },
        ),
    ]
