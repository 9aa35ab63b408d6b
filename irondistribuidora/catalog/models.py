import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models

from irondistribuidora.core.entities import MARCAS, CATEGORIAS, POPULARIDADE_PADRAO

# ====================================================================
# Produto (Peça de reposição)
# ====================================================================

class Produto(models.Model):
    """Modelo para representar uma peça (produto) no catálogo."""

    MARCA_CHOICES = [(marca, marca) for marca in MARCAS]
    CATEGORIA_CHOICES = list(CATEGORIAS.items())

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    codigo = models.CharField(max_length=50, unique=True, verbose_name="Código")
    nome = models.CharField(max_length=255, verbose_name="Nome do Produto")
    marca = models.CharField(max_length=20, choices=MARCA_CHOICES, db_index=True)
    categoria = models.CharField(max_length=20, choices=CATEGORIA_CHOICES, db_index=True)
    modelo = models.CharField(max_length=100, verbose_name="Modelo do Aparelho")
    imagem_url = models.CharField(max_length=500, blank=True, default="", verbose_name="URL da Imagem")
    descricao = models.TextField(blank=True, null=True, verbose_name="Descrição")
    tags = models.JSONField(default=list, blank=True)

    # Preço e Estoque
    preco = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))], verbose_name="Preço de Venda"
    )
    quantidade_estoque = models.PositiveIntegerField(default=0, verbose_name="Estoque Atual")
    # Flag redundante, mantida manualmente; o catálogo confia nela
    em_estoque = models.BooleanField(default=False, db_index=True, verbose_name="Em Estoque")
    popularidade = models.PositiveSmallIntegerField(
        default=POPULARIDADE_PADRAO, null=True, blank=True,
        validators=[MaxValueValidator(100)],
    )
    data_reposicao = models.DateTimeField(blank=True, null=True, verbose_name="Previsão de Reposição")

    # Datas
    data_criacao = models.DateTimeField(auto_now_add=True)
    data_atualizacao = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Produto"
        verbose_name_plural = "Produtos"
        ordering = ['nome']
        db_table = 'catalogo_produto'

    def __str__(self):
        return f"{self.codigo} - {self.nome}"
