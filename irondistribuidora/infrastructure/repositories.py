"""
Camada de Infraestrutura: Implementação de Repositórios.

Esta camada traduz as operações abstratas definidas nas Portas da Core
em chamadas concretas ao framework (Django ORM).
"""
import logging
import uuid
from typing import List, Optional, Tuple

from django.db import transaction
from django.db.models import Q, Max, BigIntegerField
from django.db.models.functions import Cast
from django.db.utils import IntegrityError, DatabaseError

# Importação Lenta (Lazy Loading) para Modelos Django
from django.apps import apps

# Importações da Camada CORE (ENTIDADES e PORTAS)
from irondistribuidora.core.entities import Produto, Pedido, Usuario, Endereco
from irondistribuidora.core.ports import (
    IProdutoRepository,
    IPedidoRepository,
    IUsuarioRepository,
)
from irondistribuidora.core.exceptions import (
    PedidoNaoEncontradoError,
    UsuarioNaoEncontradoError,
    PersistenciaError,
    NumeroPedidoDuplicadoError,
)

from .mappers import ProdutoMapper, PedidoMapper, ItemPedidoMapper, UsuarioMapper

logger = logging.getLogger(__name__)


# Helper para Lazy Loading
def get_model(app_label, model_name):
    """Busca o modelo Django de forma segura (Lazy Loading)."""
    return apps.get_model(app_label, model_name)


def uuid_valido(valor) -> bool:
    """Ids que não são UUID nunca existem no banco; evita ValidationError no filtro."""
    try:
        uuid.UUID(str(valor))
    except (TypeError, ValueError):
        return False
    return True


# ====================================================================
# 1. PRODUTOS
# ====================================================================

class ProdutoRepositoryDjango(IProdutoRepository):
    """Implementação do ProdutoRepository usando o Django ORM."""

    @property
    def ProdutoModel(self):
        return get_model('catalog', 'Produto')

    def buscar_todos(self) -> List[Produto]:
        # A ordenação final é feita pelo pipeline do catálogo
        return [ProdutoMapper.to_entity(model) for model in self.ProdutoModel.objects.all()]

    def buscar_por_id(self, produto_id: str) -> Optional[Produto]:
        if not uuid_valido(produto_id):
            return None
        try:
            return ProdutoMapper.to_entity(self.ProdutoModel.objects.get(pk=produto_id))
        except self.ProdutoModel.DoesNotExist:
            return None

    def buscar_por_ids(self, produto_ids: List[str]) -> List[Produto]:
        ids = [produto_id for produto_id in produto_ids if uuid_valido(produto_id)]
        if not ids:
            return []
        return [ProdutoMapper.to_entity(model) for model in self.ProdutoModel.objects.filter(pk__in=ids)]

    def salvar(self, produto: Produto) -> Produto:
        """Cria ou atualiza um produto (usado pela carga inicial e pelos testes)."""
        model = None
        if uuid_valido(produto.id):
            model = self.ProdutoModel.objects.filter(pk=produto.id).first()
        model = ProdutoMapper.to_model(produto, model)
        model.save()
        return ProdutoMapper.to_entity(model)


# ====================================================================
# 2. PEDIDOS
# ====================================================================

class PedidoRepositoryDjango(IPedidoRepository):
    """Implementação do PedidoRepository usando o Django ORM."""

    # Propriedades para carregar modelos de forma LAZY
    @property
    def PedidoModel(self):
        return get_model('vendas', 'Pedido')

    @property
    def ItemPedidoModel(self):
        return get_model('vendas', 'ItemPedido')

    def _queryset(self):
        return self.PedidoModel.objects.prefetch_related('itens')

    def criar_pedido(self, pedido: Pedido) -> Pedido:
        """
        Grava pedido e itens numa única transação; nada fica gravado pela metade.

        Uma IntegrityError só é tratada como colisão de número quando o número
        tentado de fato já existe. Qualquer outra falha vira PersistenciaError.
        """
        try:
            with transaction.atomic():
                model = PedidoMapper.to_model(pedido)
                model.save(force_insert=True)
                self.ItemPedidoModel.objects.bulk_create([
                    ItemPedidoMapper.to_model(item, pedido_id=model.id)
                    for item in pedido.itens
                ])
        except IntegrityError as e:
            if self.PedidoModel.objects.filter(numero_pedido=pedido.numero_pedido).exists():
                raise NumeroPedidoDuplicadoError(pedido.numero_pedido) from e
            logger.error("Falha de integridade ao gravar o pedido %s: %s", pedido.numero_pedido, e)
            raise PersistenciaError(f"Erro ao gravar o pedido: {e}") from e
        except DatabaseError as e:
            logger.error("Erro de banco ao gravar o pedido %s: %s", pedido.numero_pedido, e)
            raise PersistenciaError(f"Erro ao gravar o pedido: {e}") from e

        return PedidoMapper.to_entity(self._queryset().get(pk=model.pk))

    def ultimo_numero_sequencial(self) -> Optional[str]:
        """Maior número puramente numérico (comparação numérica, não textual)."""
        try:
            resultado = (
                self.PedidoModel.objects
                .filter(numero_pedido__regex=r'^[0-9]+$')
                .annotate(numero_int=Cast('numero_pedido', BigIntegerField()))
                .aggregate(maior=Max('numero_int'))
            )
        except DatabaseError as e:
            raise PersistenciaError(f"Erro ao consultar a numeração de pedidos: {e}") from e

        maior = resultado['maior']
        return str(maior) if maior is not None else None

    def buscar_por_id(self, pedido_id: str) -> Optional[Pedido]:
        if not uuid_valido(pedido_id):
            return None
        try:
            return PedidoMapper.to_entity(self._queryset().get(pk=pedido_id))
        except self.PedidoModel.DoesNotExist:
            return None

    def listar_pedidos_por_usuario(self, usuario_id: str) -> List[Pedido]:
        """Lista todos os pedidos de um usuário, do mais recente para o mais antigo."""
        if not uuid_valido(usuario_id):
            return []
        qs = self._queryset().filter(usuario_id=usuario_id).order_by('-data_criacao')
        return [PedidoMapper.to_entity(model) for model in qs]

    def listar_todos_pedidos(
        self,
        status: Optional[str] = None,
        busca: Optional[str] = None,
        pagina: int = 1,
        limite: int = 20,
    ) -> Tuple[List[Pedido], int]:
        """Lista todos os pedidos, opcionalmente filtrados por status e busca textual."""
        qs = self._queryset()
        if status:
            qs = qs.filter(status=status)
        if busca:
            qs = qs.filter(
                Q(numero_pedido__icontains=busca)
                | Q(nome_cliente__icontains=busca)
                | Q(email_cliente__icontains=busca)
                | Q(telefone_cliente__icontains=busca)
            )

        total = qs.count()
        inicio = (pagina - 1) * limite
        modelos = qs.order_by('-data_criacao')[inicio:inicio + limite]
        return [PedidoMapper.to_entity(model) for model in modelos], total

    def _atualizar_campo(self, pedido_id: str, campo: str, valor: str) -> Pedido:
        if not uuid_valido(pedido_id):
            raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")
        try:
            model = self.PedidoModel.objects.get(pk=pedido_id)
        except self.PedidoModel.DoesNotExist:
            raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")

        setattr(model, campo, valor)
        try:
            model.save(update_fields=[campo, 'data_atualizacao'])
        except DatabaseError as e:
            raise PersistenciaError(f"Erro ao atualizar o pedido: {e}") from e
        return self.buscar_por_id(pedido_id)

    def atualizar_status(self, pedido_id: str, novo_status: str) -> Pedido:
        return self._atualizar_campo(pedido_id, 'status', novo_status)

    def atualizar_forma_pagamento(self, pedido_id: str, forma_pagamento: str) -> Pedido:
        return self._atualizar_campo(pedido_id, 'forma_pagamento', forma_pagamento)


# ====================================================================
# 3. USUÁRIOS
# ====================================================================

class UsuarioRepositoryDjango(IUsuarioRepository):
    """Leitura do perfil e atualização do endereço do usuário."""

    @property
    def UsuarioModel(self):
        return get_model('infrastructure', 'Usuario')

    def buscar_por_id(self, usuario_id: str) -> Optional[Usuario]:
        if not uuid_valido(usuario_id):
            return None
        try:
            return UsuarioMapper.to_entity(self.UsuarioModel.objects.get(pk=usuario_id))
        except self.UsuarioModel.DoesNotExist:
            return None

    def atualizar_endereco(self, usuario_id: str, endereco: Endereco) -> Usuario:
        if not uuid_valido(usuario_id):
            raise UsuarioNaoEncontradoError("Usuário não encontrado")
        try:
            model = self.UsuarioModel.objects.get(pk=usuario_id)
        except self.UsuarioModel.DoesNotExist:
            raise UsuarioNaoEncontradoError("Usuário não encontrado")

        UsuarioMapper.aplicar_endereco(model, endereco)
        try:
            model.save(update_fields=['endereco_linha1', 'endereco_linha2', 'cidade', 'estado', 'cep'])
        except DatabaseError as e:
            raise PersistenciaError(f"Erro ao atualizar o endereço: {e}") from e
        return UsuarioMapper.to_entity(model)
