"""
Mapeadores (Mappers) para converter entre:
1. Modelos do Django ORM
2. Entidades de Domínio (irondistribuidora.core.entities)
"""
from typing import Any, Optional, Type

from django.apps import apps
from django.db import models
from django.utils import timezone

# Importa as entidades do Core
from irondistribuidora.core.entities import (
    Usuario as UsuarioEntity,
    Endereco as EnderecoEntity,
    Produto as ProdutoEntity,
    DadosCliente,
    Pedido as PedidoEntity,
    ItemPedido as ItemPedidoEntity,
)


# ====================================================================
# Uso de apps.get_model para evitar dependências circulares
# ====================================================================

def get_model(app_label: str, model_name: str):
    """Retorna um modelo do Django de forma segura (lazy loading)."""
    return apps.get_model(app_label, model_name)


def _texto_id(valor) -> Optional[str]:
    return str(valor) if valor is not None else None


# ====================================================================
# MAPPER DO CATÁLOGO
# ====================================================================

class ProdutoMapper:
    """Mapeador para Produto."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('catalog', 'Produto')

    @staticmethod
    def to_entity(model: Any) -> Optional[ProdutoEntity]:
        """Converte Produto Model para Produto Entity."""
        if not model: return None
        return ProdutoEntity(
            id=str(model.id),
            codigo=model.codigo,
            nome=model.nome,
            marca=model.marca,
            categoria=model.categoria,
            modelo=model.modelo,
            preco=model.preco,
            quantidade_estoque=model.quantidade_estoque,
            em_estoque=model.em_estoque,
            popularidade=model.popularidade,
            data_reposicao=model.data_reposicao,
            imagem_url=model.imagem_url,
            descricao=model.descricao,
            tags=list(model.tags or []),
        )

    @classmethod
    def to_model(cls, entity: ProdutoEntity, model: Optional[Any] = None) -> Any:
        """Converte Produto Entity para Produto Model."""
        if not model:
            model = cls.model_class()(id=entity.id)

        model.codigo = entity.codigo
        model.nome = entity.nome
        model.marca = entity.marca
        model.categoria = entity.categoria
        model.modelo = entity.modelo
        model.preco = entity.preco
        model.quantidade_estoque = entity.quantidade_estoque
        model.em_estoque = entity.em_estoque
        model.popularidade = entity.popularidade
        model.data_reposicao = entity.data_reposicao
        model.imagem_url = entity.imagem_url
        model.descricao = entity.descricao
        model.tags = list(entity.tags)
        return model


# ====================================================================
# MAPPER DE USUÁRIO
# ====================================================================

class UsuarioMapper:
    """Mapeador para o Usuário (perfil + endereço)."""

    @staticmethod
    def to_entity(model: Any) -> Optional[UsuarioEntity]:
        """Converte Usuario Model para Usuario Entity."""
        if not model: return None
        return UsuarioEntity(
            id=str(model.id),
            nome=model.nome_exibicao,
            email=model.email,
            telefone=model.telefone,
            documento=model.documento,
            nome_loja=model.nome_loja,
            aprovado=model.aprovado,
            endereco=EnderecoEntity(
                linha1=model.endereco_linha1 or "",
                linha2=model.endereco_linha2,
                cidade=model.cidade or "",
                estado=model.estado or "",
                cep=model.cep or "",
            ),
        )

    @staticmethod
    def aplicar_endereco(model: Any, endereco: EnderecoEntity) -> Any:
        model.endereco_linha1 = endereco.linha1
        model.endereco_linha2 = endereco.linha2
        model.cidade = endereco.cidade
        model.estado = endereco.estado
        model.cep = endereco.cep
        return model


# ====================================================================
# MAPPERS DE PEDIDO
# ====================================================================

class ItemPedidoMapper:
    """Mapeador para ItemPedido."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('vendas', 'ItemPedido')

    @staticmethod
    def to_entity(model: Any) -> Optional[ItemPedidoEntity]:
        """Converte ItemPedido Model para ItemPedido Entity."""
        if not model: return None
        return ItemPedidoEntity(
            id=str(model.id),
            produto_id=_texto_id(model.produto_id),
            codigo_produto=model.codigo_produto,
            nome_produto=model.nome_produto,
            quantidade=model.quantidade,
            preco_unitario=model.preco_unitario,
        )

    @classmethod
    def to_model(cls, entity: ItemPedidoEntity, pedido_id: Any) -> Any:
        """Converte ItemPedido Entity para ItemPedido Model."""
        # Snapshot dos dados, não depende do produto continuar existindo
        return cls.model_class()(
            id=entity.id,
            pedido_id=pedido_id,
            produto_id=entity.produto_id,
            codigo_produto=entity.codigo_produto,
            nome_produto=entity.nome_produto,
            quantidade=entity.quantidade,
            preco_unitario=entity.preco_unitario,
            total=entity.total,
        )


class PedidoMapper:
    """Mapeador para Pedido."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('vendas', 'Pedido')

    @staticmethod
    def to_entity(model: Any) -> Optional[PedidoEntity]:
        """Converte Pedido Model para Pedido Entity, incluindo o snapshot do cliente."""
        if not model: return None

        cliente = DadosCliente(
            nome=model.nome_cliente,
            email=model.email_cliente,
            telefone=model.telefone_cliente,
            documento=model.documento_cliente,
            endereco_linha1=model.endereco_linha1,
            endereco_linha2=model.endereco_linha2,
            cidade=model.cidade,
            estado=model.estado,
            cep=model.cep,
        )

        return PedidoEntity(
            id=str(model.id),
            numero_pedido=model.numero_pedido,
            usuario_id=_texto_id(model.usuario_id),
            cliente=cliente,
            itens=[ItemPedidoMapper.to_entity(item) for item in model.itens.all()],
            status=model.status,
            forma_pagamento=model.forma_pagamento,
            observacoes=model.observacoes,
            mensagem_whatsapp_enviada=model.mensagem_whatsapp_enviada,
            data_criacao=model.data_criacao,
            data_atualizacao=model.data_atualizacao,
        )

    @classmethod
    def to_model(cls, entity: PedidoEntity, model: Optional[Any] = None) -> Any:
        """Converte Pedido Entity para Pedido Model."""
        if not model:
            model = cls.model_class()(id=entity.id)

        model.numero_pedido = entity.numero_pedido
        model.usuario_id = entity.usuario_id
        model.status = entity.status
        model.forma_pagamento = entity.forma_pagamento
        model.total = entity.total
        model.observacoes = entity.observacoes
        model.mensagem_whatsapp_enviada = entity.mensagem_whatsapp_enviada
        model.data_criacao = entity.data_criacao
        if timezone.is_naive(model.data_criacao):
            model.data_criacao = timezone.make_aware(model.data_criacao)

        # Snapshot do cliente
        model.nome_cliente = entity.cliente.nome
        model.email_cliente = entity.cliente.email
        model.telefone_cliente = entity.cliente.telefone
        model.documento_cliente = entity.cliente.documento
        model.endereco_linha1 = entity.cliente.endereco_linha1
        model.endereco_linha2 = entity.cliente.endereco_linha2
        model.cidade = entity.cliente.cidade
        model.estado = entity.cliente.estado
        model.cep = entity.cliente.cep

        return model
