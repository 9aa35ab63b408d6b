import uuid
from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Produto',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('codigo', models.CharField(max_length=50, unique=True, verbose_name='Código')),
                ('nome', models.CharField(max_length=255, verbose_name='Nome do Produto')),
                ('marca', models.CharField(choices=[('Samsung', 'Samsung'), ('Xiaomi', 'Xiaomi'), ('Motorola', 'Motorola'), ('iPhone', 'iPhone'), ('LG', 'LG')], db_index=True, max_length=20)),
                ('categoria', models.CharField(choices=[('display', 'Display'), ('battery', 'Bateria'), ('charging_board', 'Placa de Carga'), ('back_cover', 'Tampa Traseira')], db_index=True, max_length=20)),
                ('modelo', models.CharField(max_length=100, verbose_name='Modelo do Aparelho')),
                ('imagem_url', models.CharField(blank=True, default='', max_length=500, verbose_name='URL da Imagem')),
                ('descricao', models.TextField(blank=True, null=True, verbose_name='Descrição')),
                ('tags', models.JSONField(blank=True, default=list)),
                ('preco', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Preço de Venda')),
                ('quantidade_estoque', models.PositiveIntegerField(default=0, verbose_name='Estoque Atual')),
                ('em_estoque', models.BooleanField(db_index=True, default=False, verbose_name='Em Estoque')),
                ('popularidade', models.PositiveSmallIntegerField(blank=True, default=50, null=True, validators=[django.core.validators.MaxValueValidator(100)])),
                ('data_reposicao', models.DateTimeField(blank=True, null=True, verbose_name='Previsão de Reposição')),
                ('data_criacao', models.DateTimeField(auto_now_add=True)),
                ('data_atualizacao', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'db_table': 'catalogo_produto',
                'ordering': ['nome'],
            },
        ),
    ]
