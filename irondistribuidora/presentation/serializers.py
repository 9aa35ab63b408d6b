"""
Serializers da API.

Os serializers de entrada são o schema explícito das requisições: nenhum caso
de uso roda antes de o corpo ser validado aqui. Os de saída convertem as
Entidades do Core para o JSON consumido pelo frontend (camelCase).
"""
from datetime import datetime

from django.utils import timezone
from rest_framework import serializers

from irondistribuidora.core import validacao
from irondistribuidora.core.catalogo import ORDENACOES, ORDENACAO_RELEVANCIA, formatar_preco, formatar_data_reposicao
from irondistribuidora.core.entities import (
    MARCAS, CATEGORIAS, STATUS_PEDIDO, FORMAS_PAGAMENTO, FORMA_PAGAMENTO_PADRAO, STATUS_INICIAL,
    ItemSolicitado, DadosCliente, Endereco, FiltrosProduto,
)


# ====================================================================
# SERIALIZERS DE ENTRADA: CATÁLOGO
# ====================================================================

class ConsultaCatalogoSerializer(serializers.Serializer):
    """Parâmetros de query do catálogo (?search=&brand=&category=&inStock=&sort=&page=&limit=)."""
    search = serializers.CharField(required=False, allow_blank=True, default='', max_length=100)
    brand = serializers.ListField(child=serializers.ChoiceField(choices=MARCAS), required=False, default=list)
    category = serializers.ListField(
        child=serializers.ChoiceField(choices=list(CATEGORIAS)), required=False, default=list
    )
    inStock = serializers.BooleanField(required=False, default=False)
    sort = serializers.ChoiceField(choices=ORDENACOES, required=False, default=ORDENACAO_RELEVANCIA)
    page = serializers.IntegerField(required=False, default=1)
    limit = serializers.IntegerField(required=False, allow_null=True, default=None, min_value=1, max_value=200)

    @classmethod
    def from_query_params(cls, query_params):
        """QueryDict -> dados; marca e categoria aceitam valores repetidos ou separados por vírgula."""
        dados = {}
        for chave in ('search', 'sort', 'page', 'limit', 'inStock'):
            if chave in query_params:
                dados[chave] = query_params.get(chave)
        for chave in ('brand', 'category'):
            valores = []
            for valor in query_params.getlist(chave):
                valores.extend(v.strip() for v in valor.split(',') if v.strip())
            if valores:
                dados[chave] = valores
        return cls(data=dados)

    def to_filtros(self) -> FiltrosProduto:
        dados = self.validated_data
        return FiltrosProduto(
            marcas=list(dados['brand']),
            categorias=list(dados['category']),
            somente_em_estoque=dados['inStock'],
            busca=dados['search'],
        )


# ====================================================================
# SERIALIZERS DE ENTRADA: PEDIDOS
# ====================================================================

ITENS_ERROS = {"empty": "Pedido deve conter ao menos um item."}

class ItemPedidoEntradaSerializer(serializers.Serializer):
    # Preço, nome e código enviados pelo cliente são ignorados
    productId = serializers.CharField(max_length=64)
    quantity = serializers.IntegerField(min_value=1)


class ClienteSerializer(serializers.Serializer):
    """Bloco de contato e entrega do checkout."""
    name = serializers.CharField(max_length=validacao.MAX_NOME)
    email = serializers.CharField(max_length=254)
    phone = serializers.CharField(max_length=validacao.MAX_TELEFONE)
    docNumber = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=validacao.MAX_DOCUMENTO)
    addressLine1 = serializers.CharField(max_length=validacao.MAX_ENDERECO)
    addressLine2 = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=validacao.MAX_ENDERECO)
    city = serializers.CharField(max_length=validacao.MAX_CIDADE)
    state = serializers.CharField(max_length=2)
    postalCode = serializers.CharField(max_length=validacao.MAX_CEP)

    def validate_email(self, value):
        if not validacao.email_valido(value):
            raise serializers.ValidationError("E-mail inválido.")
        return validacao.normalizar_email(value)

    def validate_phone(self, value):
        if not validacao.telefone_valido(value):
            raise serializers.ValidationError("Telefone inválido.")
        return value.strip()

    def validate_docNumber(self, value):
        if not validacao.documento_valido(value):
            raise serializers.ValidationError("CPF/CNPJ inválido.")
        return value

    def validate_state(self, value):
        if not validacao.uf_valida(value):
            raise serializers.ValidationError("UF inválida.")
        return value.strip().upper()

    def validate_postalCode(self, value):
        if not validacao.cep_valido(value):
            raise serializers.ValidationError("CEP inválido.")
        return value.strip()

    @staticmethod
    def to_entity(dados) -> DadosCliente:
        return DadosCliente(
            nome=dados['name'],
            email=dados['email'],
            telefone=dados['phone'],
            documento=dados.get('docNumber'),
            endereco_linha1=dados['addressLine1'],
            endereco_linha2=dados.get('addressLine2'),
            cidade=dados['city'],
            estado=dados['state'],
            cep=dados['postalCode'],
        )


class CriarPedidoSerializer(serializers.Serializer):
    """Checkout do cliente (finalização via WhatsApp)."""
    items = ItemPedidoEntradaSerializer(many=True, allow_empty=False, error_messages=ITENS_ERROS)
    customer = ClienteSerializer()
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)
    paymentMethod = serializers.ChoiceField(choices=list(FORMAS_PAGAMENTO), required=False, default=FORMA_PAGAMENTO_PADRAO)

    def to_itens(self):
        return [ItemSolicitado(produto_id=i['productId'], quantidade=i['quantity']) for i in self.validated_data['items']]

    def to_cliente(self) -> DadosCliente:
        return ClienteSerializer.to_entity(self.validated_data['customer'])


class EnderecoSerializer(serializers.Serializer):
    addressLine1 = serializers.CharField(max_length=validacao.MAX_ENDERECO)
    addressLine2 = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=validacao.MAX_ENDERECO)
    city = serializers.CharField(max_length=validacao.MAX_CIDADE)
    state = serializers.CharField(max_length=2)
    postalCode = serializers.CharField(max_length=validacao.MAX_CEP)

    validate_state = ClienteSerializer.validate_state
    validate_postalCode = ClienteSerializer.validate_postalCode

    @staticmethod
    def to_entity(dados) -> Endereco:
        return Endereco(
            linha1=dados['addressLine1'],
            linha2=validacao.normalizar_texto_opcional(dados.get('addressLine2')),
            cidade=dados['city'],
            estado=dados['state'],
            cep=dados['postalCode'],
        )


class CriarPedidoAdminSerializer(serializers.Serializer):
    """Pedido manual/histórico registrado pelo administrador."""
    userId = serializers.UUIDField()
    items = ItemPedidoEntradaSerializer(many=True, allow_empty=False, error_messages=ITENS_ERROS)
    status = serializers.ChoiceField(choices=list(STATUS_PEDIDO), required=False, default=STATUS_INICIAL)
    paymentMethod = serializers.ChoiceField(choices=list(FORMAS_PAGAMENTO), required=False, default=FORMA_PAGAMENTO_PADRAO)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)
    createdAt = serializers.DateTimeField(required=False, allow_null=True)
    newAddress = EnderecoSerializer(required=False, allow_null=True)

    def to_itens(self):
        return [ItemSolicitado(produto_id=i['productId'], quantidade=i['quantity']) for i in self.validated_data['items']]

    def to_endereco(self):
        dados = self.validated_data.get('newAddress')
        return EnderecoSerializer.to_entity(dados) if dados else None


class AtualizarStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=list(STATUS_PEDIDO))


class AtualizarPagamentoSerializer(serializers.Serializer):
    paymentMethod = serializers.ChoiceField(choices=list(FORMAS_PAGAMENTO))


class ListagemPedidosAdminSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=['all', *STATUS_PEDIDO], required=False, default='all')
    search = serializers.CharField(required=False, allow_blank=True, default='', max_length=100)
    page = serializers.IntegerField(required=False, default=1, min_value=1)
    limit = serializers.IntegerField(required=False, default=20, min_value=1, max_value=100)


# ====================================================================
# SERIALIZERS DE SAÍDA
# ====================================================================

class ProdutoSerializer(serializers.Serializer):
    """Produto do catálogo (a partir da Entidade)."""
    id = serializers.CharField()
    code = serializers.CharField(source='codigo')
    name = serializers.CharField(source='nome')
    brand = serializers.CharField(source='marca')
    category = serializers.CharField(source='categoria')
    model = serializers.CharField(source='modelo')
    imageUrl = serializers.CharField(source='imagem_url')
    price = serializers.DecimalField(source='preco', max_digits=10, decimal_places=2, coerce_to_string=False)
    priceFormatted = serializers.SerializerMethodField()
    inStock = serializers.BooleanField(source='em_estoque')
    stockQuantity = serializers.IntegerField(source='quantidade_estoque')
    popularity = serializers.IntegerField(source='popularidade', allow_null=True)
    restockDate = serializers.SerializerMethodField()
    description = serializers.CharField(source='descricao', allow_null=True)
    tags = serializers.ListField(child=serializers.CharField())

    def get_priceFormatted(self, obj):
        return formatar_preco(obj.preco)

    def get_restockDate(self, obj):
        valor = obj.data_reposicao
        if not valor:
            return None
        # O ORM devolve UTC; a data exibida é a do fuso local
        if isinstance(valor, datetime) and timezone.is_aware(valor):
            valor = timezone.localtime(valor)
        # Data corrompida propaga DataInvalidaError
        return formatar_data_reposicao(valor)


class ItemPedidoSerializer(serializers.Serializer):
    id = serializers.CharField()
    productId = serializers.CharField(source='produto_id', allow_null=True)
    productCode = serializers.CharField(source='codigo_produto')
    productName = serializers.CharField(source='nome_produto')
    quantity = serializers.IntegerField(source='quantidade')
    price = serializers.DecimalField(source='preco_unitario', max_digits=10, decimal_places=2, coerce_to_string=False)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)


class PedidoSerializer(serializers.Serializer):
    """Pedido (a partir da Entidade), com o snapshot do cliente."""
    id = serializers.CharField()
    orderNumber = serializers.CharField(source='numero_pedido')
    userId = serializers.CharField(source='usuario_id', allow_null=True)
    status = serializers.CharField()
    statusLabel = serializers.SerializerMethodField()
    paymentMethod = serializers.CharField(source='forma_pagamento')
    paymentMethodLabel = serializers.SerializerMethodField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    customerName = serializers.CharField(source='cliente.nome')
    customerEmail = serializers.CharField(source='cliente.email')
    customerPhone = serializers.CharField(source='cliente.telefone')
    customerDocNumber = serializers.CharField(source='cliente.documento', allow_null=True)
    addressLine1 = serializers.CharField(source='cliente.endereco_linha1')
    addressLine2 = serializers.CharField(source='cliente.endereco_linha2', allow_null=True)
    city = serializers.CharField(source='cliente.cidade')
    state = serializers.CharField(source='cliente.estado')
    postalCode = serializers.CharField(source='cliente.cep')
    notes = serializers.CharField(source='observacoes', allow_null=True)
    whatsappMessageSent = serializers.BooleanField(source='mensagem_whatsapp_enviada')
    createdAt = serializers.DateTimeField(source='data_criacao')
    updatedAt = serializers.DateTimeField(source='data_atualizacao', allow_null=True)
    items = ItemPedidoSerializer(source='itens', many=True)

    def get_statusLabel(self, obj):
        return STATUS_PEDIDO.get(obj.status, obj.status)

    def get_paymentMethodLabel(self, obj):
        return FORMAS_PAGAMENTO.get(obj.forma_pagamento, obj.forma_pagamento)
