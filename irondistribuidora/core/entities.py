from dataclasses import dataclass, field
from decimal import Decimal
from datetime import datetime
from typing import List, Optional
import uuid

# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros.
# ====================================================================

MARCAS = ("Samsung", "Xiaomi", "Motorola", "iPhone", "LG")

CATEGORIAS = {
    "display": "Display",
    "battery": "Bateria",
    "charging_board": "Placa de Carga",
    "back_cover": "Tampa Traseira",
}

CATEGORIA_DESCRICOES = {
    "display": "Painéis originais e homologados, com garantia de 1 ano.",
    "battery": "Alta performance e segurança para reposição atacadista.",
    "charging_board": "Componentes testados para reparos rápidos e confiáveis.",
    "back_cover": "Acabamentos premium para devolver o visual original.",
}

STATUS_PEDIDO = {
    "PENDING": "Pendente",
    "CONFIRMED": "Confirmado",
    "PROCESSING": "Em Separação",
    "SHIPPED": "Enviado",
    "DELIVERED": "Entregue",
    "CANCELLED": "Cancelado",
}

FORMAS_PAGAMENTO = {
    "PIX": "Pix",
    "CREDIT_CARD": "Cartão de Crédito",
    "DEBIT_CARD": "Cartão de Débito",
    "CASH": "Dinheiro",
    "OTHER": "Outro",
}

STATUS_INICIAL = "PENDING"
FORMA_PAGAMENTO_PADRAO = "PIX"
POPULARIDADE_PADRAO = 50


@dataclass
class Endereco:
    """Endereço cadastrado no perfil do usuário."""
    linha1: str = ""
    cidade: str = ""
    estado: str = ""
    cep: str = ""
    linha2: Optional[str] = None


@dataclass
class Usuario:
    """Entidade do Usuário, usada como origem do snapshot em pedidos do admin."""
    nome: str
    email: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    telefone: Optional[str] = None
    documento: Optional[str] = None
    nome_loja: Optional[str] = None
    aprovado: bool = False
    endereco: Endereco = field(default_factory=Endereco)


@dataclass
class Produto:
    """Entidade do Produto (peça) vendida pela distribuidora."""
    codigo: str
    nome: str
    marca: str
    categoria: str
    modelo: str
    preco: Decimal
    quantidade_estoque: int = 0
    em_estoque: bool = False
    popularidade: Optional[int] = None
    data_reposicao: Optional[datetime] = None
    imagem_url: str = ""
    descricao: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class FiltrosProduto:
    """Filtros do catálogo, reconstruídos a cada requisição."""
    marcas: List[str] = field(default_factory=list)
    categorias: List[str] = field(default_factory=list)
    somente_em_estoque: bool = False
    busca: str = ""


@dataclass
class PaginaProdutos:
    """Resultado do pipeline do catálogo."""
    produtos_paginados: List[Produto]
    total_produtos: int
    total_paginas: int
    pagina: int = 1
    itens_por_pagina: int = 0

    @property
    def tem_proxima(self) -> bool:
        return self.pagina < self.total_paginas

    @property
    def tem_anterior(self) -> bool:
        return self.pagina > 1


@dataclass
class ItemSolicitado:
    """Linha do carrinho enviada pelo cliente. O preço nunca vem do cliente."""
    produto_id: str
    quantidade: int


@dataclass
class DadosCliente:
    """Snapshot dos dados de contato e entrega copiado para o pedido."""
    nome: str
    email: str
    telefone: str = ""
    documento: Optional[str] = None
    endereco_linha1: str = ""
    endereco_linha2: Optional[str] = None
    cidade: str = ""
    estado: str = ""
    cep: str = ""

    @classmethod
    def do_usuario(cls, usuario: Usuario, endereco: Optional[Endereco] = None) -> "DadosCliente":
        """Monta o snapshot a partir do perfil (e de um endereço novo, se houver)."""
        endereco = endereco or usuario.endereco
        return cls(
            nome=usuario.nome,
            email=usuario.email,
            telefone=usuario.telefone or "",
            documento=usuario.documento,
            endereco_linha1=endereco.linha1 or "",
            endereco_linha2=endereco.linha2,
            cidade=endereco.cidade or "",
            estado=endereco.estado or "",
            cep=endereco.cep or "",
        )


@dataclass
class ItemPedido:
    """Snapshot de um item no momento da compra (imutável)."""
    produto_id: str
    codigo_produto: str
    nome_produto: str
    quantidade: int
    preco_unitario: Decimal
    total: Decimal = field(init=False)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        """Calcula o total da linha após a inicialização."""
        self.total = self.preco_unitario * self.quantidade


@dataclass
class Pedido:
    """Entidade do Pedido de Venda."""
    numero_pedido: str
    cliente: DadosCliente
    itens: List[ItemPedido]
    status: str = STATUS_INICIAL
    forma_pagamento: str = FORMA_PAGAMENTO_PADRAO
    usuario_id: Optional[str] = None
    observacoes: Optional[str] = None
    mensagem_whatsapp_enviada: bool = False
    data_criacao: datetime = field(default_factory=datetime.now)
    data_atualizacao: Optional[datetime] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def total(self) -> Decimal:
        """Soma dos totais das linhas."""
        return sum((item.total for item in self.itens), Decimal("0.00"))


@dataclass
class PaginaPedidos:
    """Listagem paginada de pedidos do painel administrativo."""
    pedidos: List[Pedido]
    total: int
    pagina: int
    limite: int

    @property
    def total_paginas(self) -> int:
        if self.limite <= 0:
            return 0
        return -(-self.total // self.limite)

    @property
    def tem_proxima(self) -> bool:
        return self.pagina < self.total_paginas

    @property
    def tem_anterior(self) -> bool:
        return self.pagina > 1


@dataclass
class ResultadoPedido:
    """Resultado devolvido pela criação de pedidos às views."""
    sucesso: bool
    pedido_id: Optional[str] = None
    numero_pedido: Optional[str] = None
    erro: Optional[str] = None
    detalhes: List[str] = field(default_factory=list)
    pedido: Optional[Pedido] = None
    # Falha do servidor (banco, numeração), não do pedido enviado
    erro_interno: bool = False

    @classmethod
    def falha(cls, erro: str, detalhes: Optional[List[str]] = None, interno: bool = False) -> "ResultadoPedido":
        return cls(sucesso=False, erro=erro, detalhes=detalhes or [], erro_interno=interno)

    @classmethod
    def ok(cls, pedido: Pedido) -> "ResultadoPedido":
        return cls(sucesso=True, pedido_id=pedido.id, numero_pedido=pedido.numero_pedido, pedido=pedido)

    def to_dict(self) -> dict:
        dados = {"success": self.sucesso}
        if self.sucesso:
            dados["orderId"] = self.pedido_id
            dados["orderNumber"] = self.numero_pedido
        else:
            dados["error"] = self.erro
            if self.detalhes:
                dados["details"] = list(self.detalhes)
        return dados
