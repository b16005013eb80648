from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='PromoCode',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(help_text='Stored upper-case', max_length=50, unique=True)),
                ('title_en', models.CharField(blank=True, default='', max_length=200)),
                ('title_ar', models.CharField(blank=True, default='', max_length=200)),
                ('description_en', models.TextField(blank=True, default='')),
                ('description_ar', models.TextField(blank=True, default='')),
                ('discount_type', models.CharField(choices=[('percentage', 'Percentage'), ('fixed_amount', 'Fixed amount'), ('free_shipping', 'Free shipping'), ('bxgy', 'Buy X get Y')], max_length=20)),
                ('discount_value', models.DecimalField(decimal_places=2, max_digits=10)),
                ('min_order_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('max_discount_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('usage_limit', models.PositiveIntegerField(blank=True, help_text='Total redemptions allowed', null=True)),
                ('usage_count', models.PositiveIntegerField(default=0)),
                ('user_usage_limit', models.PositiveIntegerField(blank=True, help_text='Redemptions allowed per user', null=True)),
                ('auto_apply_eligible', models.BooleanField(default=False)),
                ('is_active', models.BooleanField(default=True)),
                ('valid_from', models.DateTimeField()),
                ('valid_until', models.DateTimeField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'promo_codes',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['is_active', 'valid_from', 'valid_until'], name='promo_codes_active_window_idx'),
                    models.Index(fields=['auto_apply_eligible'], name='promo_codes_auto_apply_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PromoConditionGroup',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('group_name', models.CharField(default='Shipping Conditions', max_length=100)),
                ('logic_operator', models.CharField(choices=[('AND', 'All conditions'), ('OR', 'Any condition')], default='AND', max_length=3)),
                ('sort_order', models.IntegerField(default=0)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('promo_code', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='condition_groups', to='promos.promocode')),
            ],
            options={
                'db_table': 'promo_condition_groups',
                'ordering': ['sort_order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='PromoShippingCondition',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('condition_type', models.CharField(choices=[('min_order_amount', 'Minimum order amount'), ('min_quantity', 'Minimum item quantity'), ('specific_category', 'Contains category'), ('specific_product', 'Contains product'), ('user_type', 'User type'), ('location', 'Delivery location')], max_length=30)),
                ('condition_operator', models.CharField(choices=[('>=', '>='), ('<=', '<='), ('=', '='), ('!=', '!=')], default='>=', max_length=2)),
                ('condition_value', models.CharField(max_length=255)),
                ('condition_value_numeric', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='conditions', to='promos.promoconditiongroup')),
                ('promo_code', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shipping_conditions', to='promos.promocode')),
            ],
            options={
                'db_table': 'promo_shipping_conditions',
                'ordering': ['id'],
            },
        ),
    ]
