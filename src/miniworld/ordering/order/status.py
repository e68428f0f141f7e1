"""Order fulfilment updates: status changes, tracking, wallet payments."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, String
from protean.utils.globals import current_domain

from miniworld.domain import miniworld
from miniworld.ordering.order.order import Order


@miniworld.command(part_of="Order")
class UpdateOrderStatus:
    order_id: Identifier(required=True)
    status: String(required=True, max_length=20)


@miniworld.command(part_of="Order")
class AttachTrackingNumber:
    order_id: Identifier(required=True)
    tracking_number: String(required=True, max_length=100)
    estimated_delivery: DateTime()


@miniworld.command(part_of="Order")
class RecordWalletPayment:
    order_number: String(required=True, max_length=30)
    transaction_ref: String(required=True, max_length=50)
    amount: Float(required=True)


@miniworld.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.change_status(command.status)
        repo.add(order)

    @handle(AttachTrackingNumber)
    def attach_tracking_number(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.attach_tracking_number(command.tracking_number, command.estimated_delivery)
        repo.add(order)

    @handle(RecordWalletPayment)
    def record_wallet_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo._dao.query.filter(order_number=command.order_number).all().first
        if order is None:
            raise ObjectNotFoundError(f"Order {command.order_number} not found")
        order.record_wallet_payment(command.transaction_ref, command.amount)
        repo.add(order)
        return str(order.id)
