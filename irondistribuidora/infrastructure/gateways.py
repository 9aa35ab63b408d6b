from typing import Dict, List, Optional
from urllib.parse import quote

from decouple import config

# Importa os Protocols e Entidades da camada Core
from irondistribuidora.core.ports import IWhatsappGateway
from irondistribuidora.core.entities import Pedido, Produto, FORMAS_PAGAMENTO


# ====================================================================
# GATEWAYS: Implementações concretas de serviços externos.
# ====================================================================

EMOJI = {
    "wave": "\U0001F44B",
    "cart": "\U0001F6D2",
    "person": "\U0001F464",
    "pin": "\U0001F4CD",
    "card": "\U0001F4B3",
    "memo": "\U0001F4DD",
    "rocket": "\U0001F680",
    "bullet": "\u25AA\uFE0F",
}


def rotulo_forma_pagamento(forma: Optional[str]) -> str:
    return FORMAS_PAGAMENTO.get(forma or "", "Não informado")


class WhatsAppLinkGateway(IWhatsappGateway):
    """
    Gateway do atendimento via WhatsApp.
    Implementa o Protocolo IWhatsappGateway.

    O pedido não é enviado por API: o cliente recebe um link wa.me já com a
    mensagem preenchida e conclui a conversa pelo próprio WhatsApp.
    """

    def __init__(self, numero: Optional[str] = None, site: Optional[str] = None):
        # Lendo configurações de ambiente
        self.numero = numero or config("WHATSAPP_NUMERO", default="5548991147117")
        self.site = site or config("WHATSAPP_SITE", default="irondistribuidorasc.com.br")

    def _linha_item(self, item, produtos: Dict[str, Produto]) -> str:
        produto = produtos.get(item.produto_id)
        linha = f"{EMOJI['bullet']} {item.quantidade}x {item.nome_produto}"
        if produto:
            linha += f" ({produto.marca} - {produto.modelo.upper()})"
        return linha

    def montar_mensagem_pedido(self, pedido: Pedido, produtos: Optional[Dict[str, Produto]] = None) -> str:
        """Implementa IWhatsappGateway - Mensagem de finalização do pedido."""
        produtos = produtos or {}
        cliente = pedido.cliente

        nome = (cliente.nome or "").strip() or "-"
        cidade = (cliente.cidade or "").strip() or "-"
        estado = (cliente.estado or "").strip().upper() or "-"
        observacoes = (pedido.observacoes or "").strip() or "-"

        if pedido.numero_pedido:
            cabecalho = f"{EMOJI['wave']} Olá, gostaria de finalizar o pedido #{pedido.numero_pedido}:"
        else:
            cabecalho = f"{EMOJI['wave']} Olá, gostaria de fazer um pedido:"

        linhas: List[str] = [
            cabecalho,
            f"{EMOJI['cart']} *Itens:*",
            *[self._linha_item(item, produtos) for item in pedido.itens],
            f"{EMOJI['person']} *Dados do cliente:*",
            f"{EMOJI['person']} Nome: {nome}",
            f"{EMOJI['pin']} Cidade/UF: {cidade}/{estado}",
            f"{EMOJI['card']} Pagamento: {rotulo_forma_pagamento(pedido.forma_pagamento)}",
            f"{EMOJI['memo']} Observações: {observacoes}",
            f"{EMOJI['rocket']} Enviado via site {self.site}",
        ]
        return "\n".join(linhas)

    def gerar_link(self, mensagem: str) -> str:
        """Implementa IWhatsappGateway - Link wa.me com a mensagem codificada."""
        return f"https://wa.me/{self.numero}?text={quote(mensagem, safe='')}"
