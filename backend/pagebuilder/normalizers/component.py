def normalize_component(component):
    return component.to_dict()


def normalize_item(item):
    # accordion items and group links share the same shape contract
    return item.to_dict()
