"""
Repositórios em memória.

Implementam as mesmas Portas dos repositórios Django, sem banco de dados:
usados nos testes da camada Core e em scripts que não precisam do ORM.
A unicidade do número do pedido é garantida sob um lock, como faria a
restrição UNIQUE do banco.
"""
import copy
import threading
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from irondistribuidora.core.entities import Produto, Pedido, Usuario, Endereco
from irondistribuidora.core.exceptions import (
    PedidoNaoEncontradoError,
    UsuarioNaoEncontradoError,
    NumeroPedidoDuplicadoError,
)


class ProdutoRepositoryMemoria:
    def __init__(self, produtos: Optional[List[Produto]] = None):
        self._produtos: Dict[str, Produto] = {p.id: p for p in (produtos or [])}

    def adicionar(self, produto: Produto) -> Produto:
        self._produtos[produto.id] = produto
        return produto

    def buscar_todos(self) -> List[Produto]:
        return list(self._produtos.values())

    def buscar_por_id(self, produto_id: str) -> Optional[Produto]:
        return self._produtos.get(produto_id)

    def buscar_por_ids(self, produto_ids: List[str]) -> List[Produto]:
        return [self._produtos[i] for i in dict.fromkeys(produto_ids) if i in self._produtos]


class PedidoRepositoryMemoria:
    def __init__(self):
        self._pedidos: Dict[str, Pedido] = {}
        self._lock = threading.Lock()

    @property
    def pedidos(self) -> List[Pedido]:
        return list(self._pedidos.values())

    def criar_pedido(self, pedido: Pedido) -> Pedido:
        with self._lock:
            if any(p.numero_pedido == pedido.numero_pedido for p in self._pedidos.values()):
                raise NumeroPedidoDuplicadoError(pedido.numero_pedido)
            gravado = copy.deepcopy(pedido)
            gravado.data_atualizacao = datetime.now()
            self._pedidos[gravado.id] = gravado
            return copy.deepcopy(gravado)

    def ultimo_numero_sequencial(self) -> Optional[str]:
        with self._lock:
            numeros = [int(p.numero_pedido) for p in self._pedidos.values() if p.numero_pedido.isdigit()]
        return str(max(numeros)) if numeros else None

    def buscar_por_id(self, pedido_id: str) -> Optional[Pedido]:
        pedido = self._pedidos.get(pedido_id)
        return copy.deepcopy(pedido) if pedido else None

    def listar_pedidos_por_usuario(self, usuario_id: str) -> List[Pedido]:
        pedidos = [p for p in self._pedidos.values() if p.usuario_id == usuario_id]
        return copy.deepcopy(sorted(pedidos, key=lambda p: p.data_criacao, reverse=True))

    def listar_todos_pedidos(
        self,
        status: Optional[str] = None,
        busca: Optional[str] = None,
        pagina: int = 1,
        limite: int = 20,
    ) -> Tuple[List[Pedido], int]:
        pedidos = list(self._pedidos.values())
        if status:
            pedidos = [p for p in pedidos if p.status == status]
        if busca:
            termo = busca.lower()
            pedidos = [
                p for p in pedidos
                if any(termo in (valor or "").lower() for valor in (
                    p.numero_pedido, p.cliente.nome, p.cliente.email, p.cliente.telefone
                ))
            ]
        pedidos.sort(key=lambda p: p.data_criacao, reverse=True)
        inicio = (pagina - 1) * limite
        return copy.deepcopy(pedidos[inicio:inicio + limite]), len(pedidos)

    def _atualizar(self, pedido_id: str, **campos) -> Pedido:
        with self._lock:
            if pedido_id not in self._pedidos:
                raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")
            atualizado = replace(self._pedidos[pedido_id], data_atualizacao=datetime.now(), **campos)
            self._pedidos[pedido_id] = atualizado
            return copy.deepcopy(atualizado)

    def atualizar_status(self, pedido_id: str, novo_status: str) -> Pedido:
        return self._atualizar(pedido_id, status=novo_status)

    def atualizar_forma_pagamento(self, pedido_id: str, forma_pagamento: str) -> Pedido:
        return self._atualizar(pedido_id, forma_pagamento=forma_pagamento)


class UsuarioRepositoryMemoria:
    def __init__(self, usuarios: Optional[List[Usuario]] = None):
        self._usuarios: Dict[str, Usuario] = {u.id: u for u in (usuarios or [])}

    def buscar_por_id(self, usuario_id: str) -> Optional[Usuario]:
        return self._usuarios.get(usuario_id)

    def atualizar_endereco(self, usuario_id: str, endereco: Endereco) -> Usuario:
        if usuario_id not in self._usuarios:
            raise UsuarioNaoEncontradoError("Usuário não encontrado")
        self._usuarios[usuario_id] = replace(self._usuarios[usuario_id], endereco=endereco)
        return self._usuarios[usuario_id]
