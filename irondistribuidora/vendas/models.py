import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from irondistribuidora.core.entities import (
    STATUS_PEDIDO, FORMAS_PAGAMENTO, STATUS_INICIAL, FORMA_PAGAMENTO_PADRAO
)


class Pedido(models.Model):
    """
    Modelo que representa um pedido/venda no sistema.
    Os dados do cliente são um snapshot do momento da compra.
    """
    STATUS_CHOICES = list(STATUS_PEDIDO.items())
    FORMA_PAGAMENTO_CHOICES = list(FORMAS_PAGAMENTO.items())

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    numero_pedido = models.CharField(max_length=20, unique=True, verbose_name='Número do Pedido')

    # Relacionamentos
    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='pedidos'
    )

    # Status e Pagamento
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_INICIAL, db_index=True)
    forma_pagamento = models.CharField(max_length=20, choices=FORMA_PAGAMENTO_CHOICES, default=FORMA_PAGAMENTO_PADRAO)
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    # Snapshot do cliente
    nome_cliente = models.CharField(max_length=255)
    email_cliente = models.EmailField()
    telefone_cliente = models.CharField(max_length=30, blank=True, default='')
    documento_cliente = models.CharField(max_length=20, blank=True, null=True)
    endereco_linha1 = models.CharField(max_length=255, blank=True, default='')
    endereco_linha2 = models.CharField(max_length=255, blank=True, null=True)
    cidade = models.CharField(max_length=100, blank=True, default='')
    estado = models.CharField(max_length=2, blank=True, default='')
    cep = models.CharField(max_length=20, blank=True, default='')

    observacoes = models.TextField(blank=True, null=True)
    mensagem_whatsapp_enviada = models.BooleanField(default=False)

    # Datas (data_criacao pode ser informada pelo admin para pedidos históricos)
    data_criacao = models.DateTimeField(default=timezone.now, db_index=True)
    data_atualizacao = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Pedido'
        verbose_name_plural = 'Pedidos'
        db_table = 'vendas_pedido'
        ordering = ['-data_criacao']

    def __str__(self):
        return f"Pedido #{self.numero_pedido} - {self.nome_cliente}"


class ItemPedido(models.Model):
    """
    Modelo que representa um item dentro de um pedido.
    Mantém um snapshot dos dados do produto no momento da compra.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    pedido = models.ForeignKey(Pedido, related_name='itens', on_delete=models.CASCADE)
    # Referência fraca: o item sobrevive à exclusão do produto
    produto = models.ForeignKey(
        'catalog.Produto', on_delete=models.SET_NULL, null=True, blank=True, related_name='itens_venda'
    )

    # Snapshot dos dados do produto
    codigo_produto = models.CharField(max_length=50)
    nome_produto = models.CharField(max_length=255)
    preco_unitario = models.DecimalField(max_digits=10, decimal_places=2)
    quantidade = models.PositiveIntegerField()
    total = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        verbose_name = 'Item do Pedido'
        verbose_name_plural = 'Itens do Pedido'
        db_table = 'vendas_item_pedido'

    def __str__(self):
        return f"{self.quantidade}x {self.nome_produto} em Pedido #{self.pedido.numero_pedido}"

    def save(self, *args, **kwargs):
        """Calcula o total da linha antes de salvar."""
        self.total = self.preco_unitario * self.quantidade
        super().save(*args, **kwargs)
