# irondistribuidora/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Repositorios, Gateways)
DEVE seguir para se conectar à camada Core (Casos de Uso).
"""

from typing import Protocol, Dict, List, Optional, Tuple
from abc import abstractmethod

from irondistribuidora.core.entities import Produto, Pedido, Usuario, Endereco


# ====================================================================
# 1. REPOSITÓRIOS (Portas de Persistência)
# ====================================================================

class IProdutoRepository(Protocol):
    """Protocolo para a busca de Produtos do catálogo."""

    @abstractmethod
    def buscar_todos(self) -> List[Produto]: ...

    @abstractmethod
    def buscar_por_id(self, produto_id: str) -> Optional[Produto]: ...

    @abstractmethod
    def buscar_por_ids(self, produto_ids: List[str]) -> List[Produto]:
        """Retorna apenas os produtos encontrados; ids ausentes simplesmente não aparecem."""
        ...


class IPedidoRepository(Protocol):
    """Protocolo para a persistência e gestão de Pedidos."""

    @abstractmethod
    def criar_pedido(self, pedido: Pedido) -> Pedido:
        """
        Grava o pedido e seus itens em uma única transação atômica.
        Levanta NumeroPedidoDuplicadoError se o número já existir e
        PersistenciaError para qualquer outra falha.
        """
        ...

    @abstractmethod
    def ultimo_numero_sequencial(self) -> Optional[str]:
        """Maior número de pedido puramente numérico já gravado."""
        ...

    @abstractmethod
    def buscar_por_id(self, pedido_id: str) -> Optional[Pedido]: ...

    @abstractmethod
    def listar_pedidos_por_usuario(self, usuario_id: str) -> List[Pedido]: ...

    @abstractmethod
    def listar_todos_pedidos(
        self,
        status: Optional[str] = None,
        busca: Optional[str] = None,
        pagina: int = 1,
        limite: int = 20,
    ) -> Tuple[List[Pedido], int]: ...

    @abstractmethod
    def atualizar_status(self, pedido_id: str, novo_status: str) -> Pedido: ...

    @abstractmethod
    def atualizar_forma_pagamento(self, pedido_id: str, forma_pagamento: str) -> Pedido: ...


class IUsuarioRepository(Protocol):
    """Protocolo para a leitura e atualização do perfil de Usuários."""

    @abstractmethod
    def buscar_por_id(self, usuario_id: str) -> Optional[Usuario]: ...

    @abstractmethod
    def atualizar_endereco(self, usuario_id: str, endereco: Endereco) -> Usuario: ...


# ====================================================================
# 2. GATEWAYS (Portas de Serviços Externos)
# ====================================================================

class IWhatsappGateway(Protocol):
    """Protocolo para o envio do pedido ao atendimento via WhatsApp."""

    @abstractmethod
    def montar_mensagem_pedido(self, pedido: Pedido, produtos: Optional[Dict[str, Produto]] = None) -> str: ...

    @abstractmethod
    def gerar_link(self, mensagem: str) -> str: ...
