# irondistribuidora/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) da aplicação.
Esta camada depende apenas das Entidades e Portas (Interfaces) do Core,
garantindo o isolamento da lógica de negócio.
"""
import logging
from collections import OrderedDict
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

# Entidades e Exceções
from irondistribuidora.core.entities import (
    Produto, FiltrosProduto, PaginaProdutos, PaginaPedidos, ItemSolicitado, DadosCliente,
    Endereco, ItemPedido, Pedido, ResultadoPedido,
    STATUS_PEDIDO, FORMAS_PAGAMENTO, STATUS_INICIAL, FORMA_PAGAMENTO_PADRAO,
)
from irondistribuidora.core.exceptions import (
    BaseErroCore,
    DadosInvalidosError,
    ProdutoNaoEncontradoError,
    PedidoNaoEncontradoError,
    UsuarioNaoEncontradoError,
    AcessoNegadoError,
    PersistenciaError,
    NumeroPedidoDuplicadoError,
    NumeroPedidoIndisponivelError,
    CarrinhoVazioError,
    EstoqueInsuficienteError,
    StatusInvalidoError,
    FormaPagamentoInvalidaError,
    CancelamentoNaoPermitidoError,
)
from irondistribuidora.core.catalogo import (
    filtrar_produtos, calcular_total_paginas, consultar_catalogo, ORDENACAO_RELEVANCIA,
)
from irondistribuidora.core.validacao import normalizar_email, normalizar_texto_opcional

# Portas (Interfaces) - Importadas de irondistribuidora/core/ports.py
from irondistribuidora.core.ports import (
    IProdutoRepository,
    IPedidoRepository,
    IUsuarioRepository,
)

logger = logging.getLogger(__name__)

MAX_TENTATIVAS_NUMERACAO = 5
NUMERO_PEDIDO_INICIAL = 1001
PREFIXO_PEDIDO_ADMIN = "ADM-"
DIGITOS_PEDIDO_ADMIN = 8


# ====================================================================
# 1. NUMERAÇÃO DE PEDIDOS
# ====================================================================

def proximo_numero_sequencial(ultimo_numero: Optional[str]) -> str:
    """Sucessor do maior número numérico gravado; '1001' quando não há nenhum."""
    if ultimo_numero and ultimo_numero.isdigit():
        return str(int(ultimo_numero) + 1)
    return str(NUMERO_PEDIDO_INICIAL)


def gerar_numero_admin(agora: Optional[datetime] = None) -> str:
    """'ADM-' seguido dos 8 últimos dígitos do timestamp em milissegundos."""
    agora = agora or datetime.now()
    milissegundos = str(int(agora.timestamp() * 1000))
    return f"{PREFIXO_PEDIDO_ADMIN}{milissegundos[-DIGITOS_PEDIDO_ADMIN:]}"


def incrementar_numero(numero: str) -> str:
    """
    Próximo candidato após uma colisão, preservando prefixo e largura.

    '1001' -> '1002'; 'ADM-00000099' -> 'ADM-00000100'.
    """
    prefixo = PREFIXO_PEDIDO_ADMIN if numero.startswith(PREFIXO_PEDIDO_ADMIN) else ""
    digitos = numero[len(prefixo):]
    if not digitos.isdigit():
        raise DadosInvalidosError(f"Número de pedido inválido: {numero}")
    return f"{prefixo}{int(digitos) + 1:0{len(digitos)}d}"


# ====================================================================
# 2. CASOS DE USO DO CATÁLOGO
# ====================================================================

class ConsultarCatalogoUseCase:
    """Caso de Uso responsável por filtrar, ordenar e paginar o catálogo."""
    def __init__(self, produto_repo: IProdutoRepository, itens_por_pagina: int = 60):
        self.produto_repo = produto_repo
        self.itens_por_pagina = itens_por_pagina

    def executar(
        self,
        filtros: Optional[FiltrosProduto] = None,
        ordenacao: str = ORDENACAO_RELEVANCIA,
        pagina: int = 1,
        itens_por_pagina: Optional[int] = None,
    ) -> PaginaProdutos:
        """
        Executa o pipeline sobre a lista completa de produtos.

        A página solicitada é ajustada para o intervalo [1, total_paginas],
        de modo que uma mudança de filtro nunca deixe o cliente numa página vazia.
        """
        filtros = filtros or FiltrosProduto()
        itens_por_pagina = itens_por_pagina or self.itens_por_pagina
        produtos = self.produto_repo.buscar_todos()

        total_paginas = calcular_total_paginas(len(filtrar_produtos(produtos, filtros)), itens_por_pagina)
        pagina = min(max(pagina, 1), max(total_paginas, 1))
        return consultar_catalogo(produtos, filtros, ordenacao, pagina, itens_por_pagina)


class DetalharProdutoUseCase:
    """Caso de Uso para obter os detalhes de um produto específico."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def executar(self, produto_id: str) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError(produto_id)
        return produto


# ====================================================================
# 3. CASOS DE USO DE CRIAÇÃO DE PEDIDO
# ====================================================================

class _CriacaoPedidoBase:
    """Passos comuns às duas formas de criação de pedido (cliente e admin)."""
    def __init__(self, produto_repo: IProdutoRepository, pedido_repo: IPedidoRepository):
        self.produto_repo = produto_repo
        self.pedido_repo = pedido_repo

    @staticmethod
    def _validar_forma_pagamento(forma_pagamento: Optional[str]) -> str:
        forma = (forma_pagamento or FORMA_PAGAMENTO_PADRAO).upper()
        if forma not in FORMAS_PAGAMENTO:
            raise FormaPagamentoInvalidaError(f"Forma de pagamento inválida: {forma_pagamento}")
        return forma

    @staticmethod
    def _validar_itens(itens: Sequence[ItemSolicitado]) -> None:
        if not itens:
            raise CarrinhoVazioError()
        for item in itens:
            if not isinstance(item.quantidade, int) or item.quantidade < 1:
                raise DadosInvalidosError(f"Quantidade inválida para o produto {item.produto_id}.")

    def _carregar_produtos(self, itens: Sequence[ItemSolicitado]) -> Dict[str, Produto]:
        """Busca todos os produtos referenciados; o primeiro id ausente interrompe o fluxo."""
        ids = list(OrderedDict.fromkeys(item.produto_id for item in itens))
        encontrados = {produto.id: produto for produto in self.produto_repo.buscar_por_ids(ids)}
        for produto_id in ids:
            if produto_id not in encontrados:
                raise ProdutoNaoEncontradoError(produto_id)
        return encontrados

    @staticmethod
    def _montar_itens(itens: Sequence[ItemSolicitado], produtos: Dict[str, Produto]) -> List[ItemPedido]:
        # Preço sempre vem do catálogo, nunca do cliente
        return [
            ItemPedido(
                produto_id=item.produto_id,
                codigo_produto=produtos[item.produto_id].codigo,
                nome_produto=produtos[item.produto_id].nome,
                quantidade=item.quantidade,
                preco_unitario=produtos[item.produto_id].preco,
            )
            for item in itens
        ]

    def _persistir_com_numeracao(self, pedido: Pedido, numero_inicial: str) -> Pedido:
        """
        Grava o pedido tentando até MAX_TENTATIVAS_NUMERACAO números.

        Somente a colisão de número (NumeroPedidoDuplicadoError) é repetida, com o
        candidato incrementado. Qualquer outra falha de persistência é propagada.
        """
        numero = numero_inicial
        for tentativa in range(1, MAX_TENTATIVAS_NUMERACAO + 1):
            pedido.numero_pedido = numero
            try:
                return self.pedido_repo.criar_pedido(pedido)
            except NumeroPedidoDuplicadoError:
                logger.warning(
                    "Número de pedido %s já existe (tentativa %d de %d).",
                    numero, tentativa, MAX_TENTATIVAS_NUMERACAO,
                )
                numero = incrementar_numero(numero)

        logger.error(
            "Numeração de pedido esgotada após %d tentativas (último número: %s).",
            MAX_TENTATIVAS_NUMERACAO, pedido.numero_pedido,
        )
        raise NumeroPedidoIndisponivelError(pedido.numero_pedido, MAX_TENTATIVAS_NUMERACAO)


class CriarPedidoUseCase(_CriacaoPedidoBase):
    """
    Caso de Uso do checkout do cliente:
    validação de estoque, snapshot de preços e numeração sequencial.
    """

    def executar(
        self,
        usuario_id: Optional[str],
        itens: Sequence[ItemSolicitado],
        cliente: DadosCliente,
        observacoes: Optional[str] = None,
        forma_pagamento: Optional[str] = None,
    ) -> ResultadoPedido:
        """Processa o checkout. Nunca levanta exceção de negócio: devolve um ResultadoPedido."""
        try:
            pedido = self._preparar_pedido(usuario_id, itens, cliente, observacoes, forma_pagamento)
            numero_inicial = proximo_numero_sequencial(self.pedido_repo.ultimo_numero_sequencial())
            pedido_final = self._persistir_com_numeracao(pedido, numero_inicial)
        except EstoqueInsuficienteError as e:
            logger.info("Pedido recusado por falta de estoque: %s", "; ".join(e.detalhes))
            return ResultadoPedido.falha(e.message, e.detalhes)
        except (DadosInvalidosError, CarrinhoVazioError, ProdutoNaoEncontradoError,
                FormaPagamentoInvalidaError) as e:
            return ResultadoPedido.falha(e.message)
        except NumeroPedidoIndisponivelError:
            return ResultadoPedido.falha("Não foi possível gerar o número do pedido. Tente novamente.", interno=True)
        except PersistenciaError as e:
            logger.error("Erro ao criar pedido: %s", e.message)
            return ResultadoPedido.falha("Erro ao criar pedido", interno=True)

        logger.info(
            "Pedido %s criado (usuário %s, total %s).",
            pedido_final.numero_pedido, usuario_id, pedido_final.total,
        )
        return ResultadoPedido.ok(pedido_final)

    def _preparar_pedido(self, usuario_id, itens, cliente, observacoes, forma_pagamento) -> Pedido:
        self._validar_itens(itens)
        forma = self._validar_forma_pagamento(forma_pagamento)
        produtos = self._carregar_produtos(itens)
        self._verificar_estoque(itens, produtos)

        return Pedido(
            numero_pedido="",
            cliente=self._normalizar_cliente(cliente),
            itens=self._montar_itens(itens, produtos),
            status=STATUS_INICIAL,
            forma_pagamento=forma,
            usuario_id=usuario_id,
            observacoes=normalizar_texto_opcional(observacoes),
            mensagem_whatsapp_enviada=True,
        )

    @staticmethod
    def _verificar_estoque(itens: Sequence[ItemSolicitado], produtos: Dict[str, Produto]) -> None:
        """Soma as quantidades por produto antes de comparar com o estoque."""
        solicitado: Dict[str, int] = OrderedDict()
        for item in itens:
            solicitado[item.produto_id] = solicitado.get(item.produto_id, 0) + item.quantidade

        faltas = []
        for produto_id, quantidade in solicitado.items():
            produto = produtos[produto_id]
            if quantidade > produto.quantidade_estoque:
                faltas.append((produto.nome, quantidade, produto.quantidade_estoque))

        if faltas:
            raise EstoqueInsuficienteError(faltas)

    @staticmethod
    def _normalizar_cliente(cliente: DadosCliente) -> DadosCliente:
        return DadosCliente(
            nome=cliente.nome.strip(),
            email=normalizar_email(cliente.email),
            telefone=(cliente.telefone or "").strip(),
            documento=normalizar_texto_opcional(cliente.documento),
            endereco_linha1=(cliente.endereco_linha1 or "").strip(),
            endereco_linha2=normalizar_texto_opcional(cliente.endereco_linha2),
            cidade=(cliente.cidade or "").strip(),
            estado=(cliente.estado or "").strip().upper(),
            cep=(cliente.cep or "").strip(),
        )


class CriarPedidoAdminUseCase(_CriacaoPedidoBase):
    """
    Caso de Uso para o administrador registrar um pedido em nome de um cliente.

    Não há checagem de estoque. O snapshot do cliente vem do perfil do usuário,
    sobreposto pelo endereço novo quando informado; esse endereço é gravado no
    perfil depois que o pedido é criado.
    """
    def __init__(
        self,
        produto_repo: IProdutoRepository,
        pedido_repo: IPedidoRepository,
        usuario_repo: IUsuarioRepository,
        relogio: Callable[[], datetime] = datetime.now,
    ):
        super().__init__(produto_repo, pedido_repo)
        self.usuario_repo = usuario_repo
        self.relogio = relogio

    def executar(
        self,
        usuario_id: str,
        itens: Sequence[ItemSolicitado],
        status: Optional[str] = None,
        forma_pagamento: Optional[str] = None,
        observacoes: Optional[str] = None,
        data_criacao: Optional[datetime] = None,
        novo_endereco: Optional[Endereco] = None,
    ) -> ResultadoPedido:
        try:
            status_final = (status or STATUS_INICIAL).upper()
            if status_final not in STATUS_PEDIDO:
                raise StatusInvalidoError(f"O status '{status}' não é um status de pedido válido.")
            forma = self._validar_forma_pagamento(forma_pagamento)

            usuario = self.usuario_repo.buscar_por_id(usuario_id)
            if not usuario:
                raise UsuarioNaoEncontradoError("Usuário não encontrado")

            self._validar_itens(itens)
            produtos = self._carregar_produtos(itens)

            pedido = Pedido(
                numero_pedido="",
                cliente=DadosCliente.do_usuario(usuario, novo_endereco),
                itens=self._montar_itens(itens, produtos),
                status=status_final,
                forma_pagamento=forma,
                usuario_id=usuario.id,
                observacoes=normalizar_texto_opcional(observacoes),
                data_criacao=data_criacao or self.relogio(),
            )
            pedido_final = self._persistir_com_numeracao(pedido, gerar_numero_admin(self.relogio()))
        except (StatusInvalidoError, FormaPagamentoInvalidaError, UsuarioNaoEncontradoError,
                DadosInvalidosError, CarrinhoVazioError, ProdutoNaoEncontradoError) as e:
            return ResultadoPedido.falha(e.message)
        except NumeroPedidoIndisponivelError:
            return ResultadoPedido.falha("Não foi possível gerar o número do pedido. Tente novamente.", interno=True)
        except PersistenciaError as e:
            logger.error("Erro ao criar pedido (admin): %s", e.message)
            return ResultadoPedido.falha("Erro ao criar pedido", interno=True)

        if novo_endereco:
            try:
                self.usuario_repo.atualizar_endereco(usuario.id, novo_endereco)
            except BaseErroCore as e:
                # O pedido já existe; a falha no perfil não o invalida.
                logger.error("Pedido %s criado, mas o endereço do usuário %s não foi atualizado: %s",
                             pedido_final.numero_pedido, usuario.id, e)

        logger.info("Pedido %s criado pelo administrador para o usuário %s.",
                    pedido_final.numero_pedido, usuario.id)
        return ResultadoPedido.ok(pedido_final)


# ====================================================================
# 4. CASOS DE USO DO CLIENTE
# ====================================================================

class ListarPedidosDoUsuarioUseCase:
    """Caso de Uso para listar os pedidos de um cliente específico."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def executar(self, usuario_id: str) -> List[Pedido]:
        """Retorna a lista de pedidos do usuário, do mais recente para o mais antigo."""
        return self.pedido_repo.listar_pedidos_por_usuario(usuario_id)


class DetalharPedidoDoUsuarioUseCase:
    """Detalhe de um pedido, visível apenas para o dono."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def executar(self, usuario_id: str, pedido_id: str) -> Pedido:
        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if not pedido:
            raise PedidoNaoEncontradoError("Pedido não encontrado.")
        if pedido.usuario_id != usuario_id:
            raise AcessoNegadoError()
        return pedido


class CancelarPedidoUseCase:
    """O cliente só pode cancelar o próprio pedido enquanto ele estiver pendente."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def executar(self, usuario_id: str, pedido_id: str) -> Pedido:
        pedido = DetalharPedidoDoUsuarioUseCase(self.pedido_repo).executar(usuario_id, pedido_id)
        if pedido.status != STATUS_INICIAL:
            raise CancelamentoNaoPermitidoError(
                f"Pedido {pedido.numero_pedido} não pode ser cancelado "
                f"(status atual: {STATUS_PEDIDO.get(pedido.status, pedido.status)})."
            )
        pedido_final = self.pedido_repo.atualizar_status(pedido.id, "CANCELLED")
        logger.info("Pedido %s cancelado pelo cliente %s.", pedido.numero_pedido, usuario_id)
        return pedido_final


# ====================================================================
# 5. CASOS DE USO ADMINISTRATIVOS
# ====================================================================

class GerenciarPedidosAdminUseCase:
    """Caso de Uso para listagem e atualização de pedidos (acesso administrativo)."""

    LIMITE_MAXIMO = 100

    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def listar_todos(
        self,
        status: Optional[str] = None,
        busca: Optional[str] = None,
        pagina: int = 1,
        limite: int = 20,
    ) -> PaginaPedidos:
        """Lista todos os pedidos, com filtro opcional por status ('all' = sem filtro) e busca."""
        if status and status.lower() != "all":
            status = status.upper()
            if status not in STATUS_PEDIDO:
                raise StatusInvalidoError(f"O status '{status}' não é um status de pedido válido.")
        else:
            status = None

        pagina = max(pagina, 1)
        limite = min(max(limite, 1), self.LIMITE_MAXIMO)
        pedidos, total = self.pedido_repo.listar_todos_pedidos(
            status=status, busca=normalizar_texto_opcional(busca), pagina=pagina, limite=limite
        )
        return PaginaPedidos(pedidos=pedidos, total=total, pagina=pagina, limite=limite)

    def detalhar_pedido(self, pedido_id: str) -> Pedido:
        """Busca os detalhes de um pedido específico."""
        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if not pedido:
            raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")
        return pedido

    def atualizar_status(self, pedido_id: str, novo_status: str) -> Pedido:
        """Atualiza o status de um pedido manualmente."""
        novo_status_upper = (novo_status or "").upper()
        if novo_status_upper not in STATUS_PEDIDO:
            raise StatusInvalidoError(f"O status '{novo_status}' não é um status de pedido válido.")

        self.detalhar_pedido(pedido_id)
        pedido_final = self.pedido_repo.atualizar_status(pedido_id, novo_status_upper)
        logger.info("Status do pedido %s alterado para %s.", pedido_final.numero_pedido, novo_status_upper)
        return pedido_final

    def atualizar_forma_pagamento(self, pedido_id: str, forma_pagamento: str) -> Pedido:
        forma = (forma_pagamento or "").upper()
        if forma not in FORMAS_PAGAMENTO:
            raise FormaPagamentoInvalidaError(f"Forma de pagamento inválida: {forma_pagamento}")

        self.detalhar_pedido(pedido_id)
        pedido_final = self.pedido_repo.atualizar_forma_pagamento(pedido_id, forma)
        logger.info("Forma de pagamento do pedido %s alterada para %s.", pedido_final.numero_pedido, forma)
        return pedido_final
